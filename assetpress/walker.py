"""Recursive directory traversal with per-subtree merge aggregation."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .fsutils import relative_posix, write_text_atomic
from .logging import get_logger, log_exception
from .models import ProcessedFile, WalkResult
from .transformer import SCRIPT_SUFFIX, STYLE_SUFFIX, Transformer, TransformError, get_output_filename


class TreeWalker:
    """Walks a source tree, transforming files and flushing merged bundles.

    Fragments collected while merging travel upward through return values and
    are written out at an aggregation boundary: every directory when
    ``keep_structure`` is set, otherwise only the top-level directory.
    """

    def __init__(self, root: Path, transformer: Transformer | None = None) -> None:
        self.root = root
        self.transformer = transformer or Transformer()
        self.logger = get_logger("walker")

    def walk(
        self,
        source: Path,
        output: Path,
        *,
        merge: bool = False,
        merge_name: Optional[str] = None,
        keep_structure: bool = True,
        depth: int = 0,
    ) -> WalkResult:
        if not source.is_dir():
            return self._walk_file(source, output)

        result = WalkResult()
        for child in sorted(source.iterdir(), key=lambda entry: entry.name):
            try:
                if child.is_dir():
                    child_output = output / child.name
                    child_output.mkdir(parents=True, exist_ok=True)
                    child_result = self.walk(
                        child,
                        child_output,
                        merge=merge,
                        merge_name=merge_name,
                        keep_structure=keep_structure,
                        depth=depth + 1,
                    )
                    result.extend(child_result)
                else:
                    processed = self.transformer.process(
                        child, output / get_output_filename(child.name), merge
                    )
                    if merge:
                        self._collect_fragment(result, processed)
                    else:
                        result.written.append(processed)
            except (OSError, TransformError) as exc:
                log_exception(self.logger, f"Error processing {child.name}", exc)

        if keep_structure or depth == 0:
            self._flush(result, source, output, merge_name)
        return result

    def _walk_file(self, source: Path, output: Path) -> WalkResult:
        destination = output / get_output_filename(source.name)
        try:
            processed = self.transformer.process(source, destination, False)
        except (OSError, TransformError) as exc:
            log_exception(self.logger, f"Error processing {source.name}", exc)
            return WalkResult()
        return WalkResult(written=[processed])

    def _collect_fragment(self, result: WalkResult, processed: ProcessedFile) -> None:
        if processed.code is None:
            return
        fragment = f"/** {relative_posix(processed.src, self.root)} **/\n{processed.code}"
        if processed.output.name.endswith(SCRIPT_SUFFIX):
            result.scripts.append(fragment)
        elif processed.output.name.endswith(STYLE_SUFFIX):
            result.styles.append(fragment)

    def _flush(self, result: WalkResult, source: Path, output: Path, merge_name: Optional[str]) -> None:
        base = merge_name or source.name
        for fragments, suffix, kind in (
            (result.scripts, SCRIPT_SUFFIX, "JS"),
            (result.styles, STYLE_SUFFIX, "CSS"),
        ):
            if not fragments:
                continue
            target = output / f"{base}.min{suffix}"
            try:
                self._write_merged(target, fragments, kind)
            except OSError as exc:
                log_exception(self.logger, f"Error writing merged {kind} {target.name}", exc)
            else:
                result.written.append(ProcessedFile(src=source, output=target))
            fragments.clear()

    def _write_merged(self, path: Path, fragments: List[str], kind: str) -> None:
        write_text_atomic(path, "\n".join(fragments))
        self.logger.info("Merged %s: %s -> %s", kind, path.name, self.transformer.display(path))


__all__ = ["TreeWalker"]
