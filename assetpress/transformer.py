"""Single-file minify/copy step."""

from __future__ import annotations

from pathlib import Path

from .fsutils import copy_file_atomic, relative_posix, write_text_atomic
from .logging import get_logger
from .minifiers import Minifier, MinifyError
from .models import ProcessedFile

SCRIPT_SUFFIX = ".js"
STYLE_SUFFIX = ".css"
MIN_SCRIPT_SUFFIX = ".min.js"
MIN_STYLE_SUFFIX = ".min.css"


class TransformError(RuntimeError):
    """Raised when a script or stylesheet cannot be decoded or minified."""


def get_output_filename(name: str) -> str:
    """Return the emitted name for ``name``: ``a.js`` -> ``a.min.js``, ``a.css`` -> ``a.min.css``."""
    if name.endswith(SCRIPT_SUFFIX) and not name.endswith(MIN_SCRIPT_SUFFIX):
        return name[: -len(SCRIPT_SUFFIX)] + MIN_SCRIPT_SUFFIX
    if name.endswith(STYLE_SUFFIX) and not name.endswith(MIN_STYLE_SUFFIX):
        return name[: -len(STYLE_SUFFIX)] + MIN_STYLE_SUFFIX
    return name


class Transformer:
    """Minifies scripts and stylesheets, copies every other file verbatim."""

    def __init__(self, minifier: Minifier | None = None, *, display_root: Path | None = None) -> None:
        self.minifier = minifier or Minifier()
        self.display_root = display_root
        self.logger = get_logger("transformer")

    def process(self, source: Path, destination: Path, merge_requested: bool = False) -> ProcessedFile:
        name = source.name
        if name.endswith(SCRIPT_SUFFIX) and not name.endswith(MIN_SCRIPT_SUFFIX):
            return self._minify(source, destination, merge_requested, kind="JS")
        if name.endswith(STYLE_SUFFIX) and not name.endswith(MIN_STYLE_SUFFIX):
            return self._minify(source, destination, merge_requested, kind="CSS")
        return self._copy(source, destination)

    def display(self, path: Path) -> str:
        """Format ``path`` for progress output, relative to the build root when known."""
        if self.display_root is None:
            return str(path)
        return relative_posix(path, self.display_root)

    def _minify(self, source: Path, destination: Path, merge_requested: bool, *, kind: str) -> ProcessedFile:
        try:
            text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise TransformError(f"{source.name} is not valid UTF-8: {exc}") from exc

        try:
            if kind == "JS":
                code = self.minifier.minify_script(text)
            else:
                code = self.minifier.minify_stylesheet(text)
        except MinifyError as exc:
            raise TransformError(f"{source.name}: {exc}") from exc

        if merge_requested:
            self.logger.debug("Queued %s for merge: %s", kind, source.name)
        else:
            write_text_atomic(destination, code)
            self.logger.info("Minified %s: %s -> %s", kind, source.name, self.display(destination))
        return ProcessedFile(src=source, output=destination, code=code)

    def _copy(self, source: Path, destination: Path) -> ProcessedFile:
        copy_file_atomic(source, destination)
        self.logger.info("Copied file: %s -> %s", source.name, self.display(destination))
        return ProcessedFile(src=source, output=destination, code=None)


__all__ = ["Transformer", "TransformError", "get_output_filename"]
