# =============================================================================
# conftest.py - Shared fixtures
# =============================================================================

import logging

import pytest

from dotmatrix.display.buffer import DotGrid
from dotmatrix.display.dmd import DotMatrixDisplay
from dotmatrix.display.mock import ManualScheduler, RecordingSurface


@pytest.fixture
def grid():
    """4x4 grid with the construction-time full repaint already drained."""
    g = DotGrid(4, 4)
    g.drain()
    return g

@pytest.fixture
def surface():
    """Recording surface sized for a 4x4 grid of 10px dots."""
    return RecordingSurface(40, 40)

@pytest.fixture
def scheduler():
    return ManualScheduler()

@pytest.fixture
def display(surface, scheduler):
    """4x4 dot display on a recording surface; closed after the test."""
    d = DotMatrixDisplay(surface, scheduler, dot_size=10)
    yield d
    d.close()

@pytest.fixture
def restore_root_logger():
    """Undo setup_logging() changes to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
