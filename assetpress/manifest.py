"""Persistent JSON asset manifest shared with the server-side template layer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from .fsutils import write_text_atomic
from .models import ManifestEntry


class ManifestError(RuntimeError):
    """Raised when the manifest file exists but cannot be used."""


class ManifestNotFoundError(FileNotFoundError):
    """Raised when the manifest has not been produced by the upstream build."""


class AssetManifest:
    """Ordered mapping of source asset paths to emitted build files.

    Entries written by other tools are kept verbatim, whatever their shape;
    only keys upserted through :meth:`upsert` are replaced.
    """

    def __init__(self, path: Path, entries: Dict[str, object]) -> None:
        self._path = path
        self._entries = entries
        self._dirty = False

    @classmethod
    def load(cls, path: Path) -> "AssetManifest":
        if not path.is_file():
            raise ManifestNotFoundError(
                f"Manifest not found at {path}. Ensure the build process is complete."
            )
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Manifest at {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest at {path} must contain a JSON object")
        return cls(path, data)

    def upsert(self, entry: ManifestEntry) -> None:
        self._entries[entry.src] = entry.to_dict()
        self._dirty = True

    def persist(self) -> None:
        if not self._dirty:
            return
        write_text_atomic(self._path, json.dumps(self._entries, indent=2, ensure_ascii=False) + "\n")
        self._dirty = False


__all__ = ["AssetManifest", "ManifestError", "ManifestNotFoundError"]
