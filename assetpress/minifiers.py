"""Script and stylesheet minifier adapters."""

from __future__ import annotations

import rcssmin
import rjsmin


class MinifyError(ValueError):
    """Raised when a minifier rejects its input."""


class Minifier:
    """Wraps rjsmin/rcssmin behind a small, injectable interface."""

    def __init__(self, *, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def minify_script(self, code: str) -> str:
        try:
            return rjsmin.jsmin(code, keep_bang_comments=self.keep_bang_comments)
        except Exception as exc:
            raise MinifyError(f"JavaScript minification failed: {exc}") from exc

    def minify_stylesheet(self, code: str) -> str:
        try:
            return rcssmin.cssmin(code, keep_bang_comments=self.keep_bang_comments)
        except Exception as exc:
            raise MinifyError(f"CSS minification failed: {exc}") from exc


__all__ = ["Minifier", "MinifyError"]
