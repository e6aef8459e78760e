from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.asset_tree import AssetTreeBuilder


@pytest.fixture
def asset_tree(tmp_path: Path) -> AssetTreeBuilder:
    """Provide a reusable asset project rooted at the pytest tmp_path."""
    return AssetTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_assetpress_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("assetpress")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
