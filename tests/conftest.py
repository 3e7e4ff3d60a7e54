" generic fixtures "
import logging
from dataclasses import dataclass, field
from unittest.mock import AsyncMock

import pytest

from nirihelper.models import ActionError, FocusedOutput, FocusedWindow


def pytest_configure():
    "Runs once before all"
    from nirihelper.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


WINDOW_TILED = {
    "id": 7,
    "title": "foot",
    "app_id": "foot",
    "pid": 1234,
    "workspace_id": 1,
    "is_focused": True,
    "is_floating": False,
    "is_urgent": False,
    "layout": {
        "pos_in_scrolling_layout": [3, 1],
        "tile_size": [800.0, 600.0],
        "window_size": [796, 596],
        "tile_pos_in_workspace_view": None,
        "window_offset_in_tile": [2.0, 2.0],
    },
}

WINDOW_FLOATING = {
    "id": 12,
    "title": "mpv",
    "app_id": "mpv",
    "pid": 4321,
    "workspace_id": 1,
    "is_focused": True,
    "is_floating": True,
    "is_urgent": False,
    "layout": {
        "pos_in_scrolling_layout": None,
        "tile_size": [640.0, 360.0],
        "window_size": [640, 360],
        "tile_pos_in_workspace_view": [100.0, 200.0],
        "window_offset_in_tile": [0.0, 0.0],
    },
}

OUTPUT = {
    "name": "DP-1",
    "make": "Microstep",
    "model": "MAG342CQPV",
    "serial": "DB6H513700137",
    "physical_size": [800, 340],
    "current_mode": 0,
    "vrr_supported": False,
    "vrr_enabled": False,
    "logical": {"x": 1920, "y": 0, "width": 2560, "height": 1440, "scale": 1.0, "transform": "Normal"},
}


@dataclass
class FakeSession:
    "Records requests instead of talking to niri"

    window: FocusedWindow | None = None
    output: FocusedOutput | None = None
    sent: list[dict] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)

    async def query_focused_window(self):
        self.queries.append("FocusedWindow")
        return self.window

    async def query_focused_output(self):
        self.queries.append("FocusedOutput")
        return self.output

    async def send_action(self, action):
        self.sent.append(action)
        variant = next(iter(action))
        if variant in self.failing:
            raise ActionError(action, f"{variant} failed")

    @property
    def variants(self):
        return [next(iter(action)) for action in self.sent]


@pytest.fixture
def test_logger():
    return logging.getLogger("tests")


@pytest.fixture
def tiled_window():
    return FocusedWindow.from_json(WINDOW_TILED)


@pytest.fixture
def floating_window():
    return FocusedWindow.from_json(WINDOW_FLOATING)


@pytest.fixture
def output():
    return FocusedOutput.from_json(OUTPUT)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def delegate():
    return AsyncMock(return_value=0)
