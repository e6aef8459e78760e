"""Post-build minification, merging and manifest registration for web assets."""

from .config import AssetPressConfig, ConfigError, InputConfig, load_config
from .manifest import AssetManifest, ManifestError, ManifestNotFoundError
from .models import ManifestEntry, ProcessedFile, WalkResult
from .orchestrator import Orchestrator, RunSummary
from .transformer import Transformer, TransformError, get_output_filename
from .walker import TreeWalker

__all__ = [
    "AssetManifest",
    "AssetPressConfig",
    "ConfigError",
    "InputConfig",
    "ManifestEntry",
    "ManifestError",
    "ManifestNotFoundError",
    "Orchestrator",
    "ProcessedFile",
    "RunSummary",
    "TransformError",
    "Transformer",
    "TreeWalker",
    "WalkResult",
    "get_output_filename",
    "load_config",
]
