from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.component_tree import ComponentTreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> ComponentTreeBuilder:
    """Provide a reusable component tree rooted at the pytest tmp_path."""
    return ComponentTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def reset_storygen_logger() -> Iterator[None]:
    """Undo configure_logging() so CLI tests do not leak handlers into later tests."""
    yield
    logger = logging.getLogger("storygen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
