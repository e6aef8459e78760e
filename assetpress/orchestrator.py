"""Runs configured inputs through the walker and records them in the manifest."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_BUILD_ROOT, DEFAULT_MANIFEST_PATH, AssetPressConfig, InputConfig, load_config
from .fsutils import relative_posix
from .logging import get_logger, log_exception
from .manifest import AssetManifest
from .minifiers import Minifier
from .models import ManifestEntry, WalkResult
from .transformer import Transformer
from .walker import TreeWalker


@dataclass
class RunSummary:
    """Outcome of one manifest update run."""

    manifest_path: Path
    processed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    entries_written: int = 0


class Orchestrator:
    """Coordinates minification of every configured input and the manifest update."""

    def __init__(self, minifier: Minifier | None = None) -> None:
        self.minifier = minifier
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path = ".",
        *,
        config: AssetPressConfig | None = None,
        manifest_path: str | None = None,
    ) -> RunSummary:
        """Load ``.assetpress.yml`` from ``path`` and update the manifest."""
        config = config or load_config(Path(path))
        return self.run_inputs(
            config.root,
            config.inputs,
            manifest_path=manifest_path or config.manifest_path,
            build_root=config.build_root,
            keep_bang_comments=config.keep_bang_comments,
        )

    def run_inputs(
        self,
        root: Path,
        inputs: Iterable[InputConfig],
        *,
        manifest_path: str | Path = DEFAULT_MANIFEST_PATH,
        build_root: str | Path = DEFAULT_BUILD_ROOT,
        keep_bang_comments: bool = False,
    ) -> RunSummary:
        root = root.resolve()
        inputs = list(inputs)
        manifest_file = (root / manifest_path).resolve()
        build_dir = (root / build_root).resolve()

        if not inputs:
            self.logger.warning("No inputs configured. Add `input` entries to .assetpress.yml.")

        self.logger.info("Looking for manifest at %s", manifest_file)
        try:
            manifest = AssetManifest.load(manifest_file)
        except FileNotFoundError as exc:
            self.logger.error("%s", exc)
            raise
        self.logger.info("Manifest found, updating with new entries...")

        minifier = self.minifier or Minifier(keep_bang_comments=keep_bang_comments)
        walker = TreeWalker(root, Transformer(minifier, display_root=build_dir))
        summary = RunSummary(manifest_path=manifest_file)

        for item in inputs:
            source = (root / item.src).resolve()
            output = (root / item.output).resolve()
            if not os.access(source, os.F_OK | os.R_OK):
                self.logger.error("Source path does not exist or is inaccessible: %s", source)
                summary.skipped.append(item.src)
                continue

            try:
                result = walker.walk(
                    source,
                    output,
                    merge=item.merge,
                    merge_name=item.merge_name,
                    keep_structure=item.keep_structure,
                )
            except OSError as exc:
                log_exception(self.logger, f"Error reading {source}", exc)
                summary.skipped.append(item.src)
                continue
            summary.entries_written += self._record(manifest, result, root, build_dir)
            manifest.persist()
            summary.processed.append(item.src)
            self.logger.info("Manifest updated with entries for %s", item.src)

        return summary

    def minify(
        self,
        root: Path,
        item: InputConfig,
        *,
        build_root: Optional[str | Path] = None,
        keep_bang_comments: bool = False,
    ) -> WalkResult:
        """Process a single input without touching any manifest."""
        root = root.resolve()
        source = (root / item.src).resolve()
        if not source.exists():
            raise FileNotFoundError(f"Source path does not exist: {source}")
        display_root = (root / build_root).resolve() if build_root is not None else root
        minifier = self.minifier or Minifier(keep_bang_comments=keep_bang_comments)
        walker = TreeWalker(root, Transformer(minifier, display_root=display_root))
        return walker.walk(
            source,
            (root / item.output).resolve(),
            merge=item.merge,
            merge_name=item.merge_name,
            keep_structure=item.keep_structure,
        )

    def _record(self, manifest: AssetManifest, result: WalkResult, root: Path, build_dir: Path) -> int:
        recorded: Dict[str, str] = {}
        for processed in result.written:
            key = relative_posix(processed.src, root)
            file = relative_posix(processed.output, build_dir)
            if key in recorded:
                self.logger.warning(
                    "Manifest entry %s already points at %s; replacing it with %s",
                    key,
                    recorded[key],
                    file,
                )
            manifest.upsert(ManifestEntry(file=file, src=key))
            recorded[key] = file
        return len(recorded)


__all__ = ["Orchestrator", "RunSummary"]
