"""Core data models shared across assetpress components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ProcessedFile:
    """Result of transforming, copying or merging one output file."""

    src: Path
    output: Path
    code: Optional[str] = None


@dataclass
class WalkResult:
    """Files written by a traversal plus fragments still waiting for a merge."""

    written: List[ProcessedFile] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)

    @property
    def pending(self) -> bool:
        return bool(self.scripts or self.styles)

    def extend(self, other: "WalkResult") -> None:
        self.written.extend(other.written)
        self.scripts.extend(other.scripts)
        self.styles.extend(other.styles)


@dataclass(frozen=True)
class ManifestEntry:
    """Manifest record pointing a source asset at its emitted file."""

    file: str
    src: str
    is_entry: bool = True

    def to_dict(self) -> Dict[str, object]:
        return {"file": self.file, "src": self.src, "isEntry": self.is_entry}
