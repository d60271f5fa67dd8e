"""Pytest configuration and shared fixtures."""

from typing import Callable

import cv2
import numpy as np
import pytest

from uihighlight.core.batch import BatchListener, BatchOrchestrator
from uihighlight.core.uploads import MemoryFile


# ============================================================================
# Image and layout dump factories
# ============================================================================


def _encode_png(width: int, height: int, color=(0, 0, 0)) -> bytes:
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :] = color
    ok, encoded = cv2.imencode(".png", image)
    assert ok
    return encoded.tobytes()


def _layout_dump(*leaf_bounds: str, root_bounds: str = "[0,0][300,200]") -> str:
    leaves = "\n".join(
        f'    <node index="{i}" class="android.widget.TextView" bounds="{bounds}" />'
        for i, bounds in enumerate(leaf_bounds)
    )
    return (
        "<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>\n"
        '<hierarchy rotation="0">\n'
        f'  <node index="0" class="android.widget.FrameLayout" bounds="{root_bounds}">\n'
        f"{leaves}\n"
        "  </node>\n"
        "</hierarchy>\n"
    )


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    """Build solid-color PNG screenshots of a given size."""
    return _encode_png


@pytest.fixture
def dump_factory() -> Callable[..., str]:
    """Build a layout dump whose root node wraps one leaf per bounds string."""
    return _layout_dump


@pytest.fixture
def pair_files(png_factory, dump_factory) -> Callable[..., tuple[MemoryFile, MemoryFile]]:
    """Build a matching (layout dump, screenshot) upload pair."""

    def make(name: str, width: int = 300, height: int = 200, *bounds: str) -> tuple[MemoryFile, MemoryFile]:
        leaf_bounds = bounds or ("[10,20][110,120]",)
        dump = MemoryFile(f"{name}.xml", dump_factory(*leaf_bounds, root_bounds=f"[0,0][{width},{height}]").encode())
        screenshot = MemoryFile(f"{name}.png", png_factory(width, height))
        return dump, screenshot

    return make


# ============================================================================
# Orchestrator Fixtures
# ============================================================================


class RecordingListener(BatchListener):
    """Listener that records every event it receives."""

    def __init__(self) -> None:
        self.statuses = []
        self.started = []
        self.completed = []
        self.failed = {}
        self.reports = []

    def status_changed(self, status):
        self.statuses.append(status)

    def pair_started(self, name):
        self.started.append(name)

    def pair_completed(self, name, image):
        self.completed.append(name)

    def pair_failed(self, name, error):
        self.failed[name] = error

    def batch_finished(self, report):
        self.reports.append(report)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def orchestrator(listener: RecordingListener) -> BatchOrchestrator:
    """Orchestrator with a short status clear delay for timer tests."""
    return BatchOrchestrator(listener=listener, status_clear_delay=0.05)
