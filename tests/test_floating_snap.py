"""Tests for the floating-snap-or command."""

import pytest

from nirihelper.config import Margins
from nirihelper.handlers import Handlers, snap_action
from nirihelper.models import ActionError, Direction, FocusedOutput, FocusedWindow, OutputGeometry, QueryMissError

FALLBACK = {"FocusColumnLeft": {}}


def make_window(width=640.0, height=360.0):
    return FocusedWindow(id=12, is_floating=True, tile_size=(width, height))


def make_output(x=1920, y=100, width=2560, height=1440):
    return FocusedOutput(name="DP-1", logical=OutputGeometry(x, y, width, height))


@pytest.mark.parametrize(
    ("direction", "x", "y"),
    [
        (Direction.LEFT, {"SetFixed": 1920.0}, {"AdjustFixed": 0.0}),
        (Direction.RIGHT, {"SetFixed": 1920.0 + 2560 - 640}, {"AdjustFixed": 0.0}),
        (Direction.UP, {"AdjustFixed": 0.0}, {"SetFixed": 100.0}),
        (Direction.DOWN, {"AdjustFixed": 0.0}, {"SetFixed": 100.0 + 1440 - 48 - 360}),
    ],
)
def test_snap_action(direction, x, y):
    action = snap_action(make_window(), make_output(), direction, Margins())
    assert action == {"MoveFloatingWindow": {"id": 12, "x": x, "y": y}}


def test_snap_action_custom_margins():
    margins = Margins(left=10, right=20, top=30, bottom=0)
    window, output = make_window(), make_output(x=0, y=0, width=1000, height=800)

    assert snap_action(window, output, Direction.LEFT, margins)["MoveFloatingWindow"]["x"] == {"SetFixed": 10.0}
    assert snap_action(window, output, Direction.RIGHT, margins)["MoveFloatingWindow"]["x"] == {"SetFixed": 1000 - 20 - 640.0}
    assert snap_action(window, output, Direction.UP, margins)["MoveFloatingWindow"]["y"] == {"SetFixed": 30.0}
    assert snap_action(window, output, Direction.DOWN, margins)["MoveFloatingWindow"]["y"] == {"SetFixed": 800 - 360.0}


def test_snap_action_unknown_geometry():
    output = FocusedOutput(name="HEADLESS-1", logical=None)
    action = snap_action(make_window(), output, Direction.DOWN, Margins())
    assert action["MoveFloatingWindow"]["y"] == {"SetFixed": 0 - 48 - 360.0}


@pytest.mark.asyncio
async def test_floating_window_is_snapped(session, delegate, floating_window, output):
    session.window = floating_window
    session.output = output

    await Handlers(session, delegate).run_floating_snap_or(Direction.RIGHT, FALLBACK)

    assert session.queries == ["FocusedWindow", "FocusedOutput"]
    assert session.sent == [
        {"MoveFloatingWindow": {"id": 12, "x": {"SetFixed": 1920.0 + 2560 - 640}, "y": {"AdjustFixed": 0.0}}},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("direction", list(Direction))
async def test_tiled_window_runs_fallback(session, delegate, tiled_window, direction):
    session.window = tiled_window

    await Handlers(session, delegate).run_floating_snap_or(direction, FALLBACK)

    assert session.sent == [FALLBACK]
    assert session.queries == ["FocusedWindow"]


@pytest.mark.asyncio
async def test_no_focused_window(session, delegate):
    with pytest.raises(QueryMissError, match="no focused window"):
        await Handlers(session, delegate).run_floating_snap_or(Direction.LEFT, FALLBACK)
    assert session.sent == []


@pytest.mark.asyncio
async def test_no_focused_output(session, delegate, floating_window):
    session.window = floating_window
    with pytest.raises(QueryMissError, match="no focused output"):
        await Handlers(session, delegate).run_floating_snap_or(Direction.LEFT, FALLBACK)
    assert session.sent == []


@pytest.mark.asyncio
async def test_rejected_move_is_an_error(session, delegate, floating_window, output):
    session.window = floating_window
    session.output = output
    session.failing.add("MoveFloatingWindow")

    with pytest.raises(ActionError, match="MoveFloatingWindow failed"):
        await Handlers(session, delegate).run_floating_snap_or(Direction.UP, FALLBACK)


@pytest.mark.asyncio
async def test_margins_from_config(session, delegate, floating_window, output, test_logger):
    from nirihelper.config import CONFIG_SCHEMA, Configuration, default_config

    config = default_config(test_logger)
    config["margins"] = Configuration({"bottom": 0}, logger=test_logger, schema=CONFIG_SCHEMA["margins"])
    session.window = floating_window
    session.output = output

    await Handlers(session, delegate, config).run_floating_snap_or(Direction.DOWN, FALLBACK)

    assert session.sent[0]["MoveFloatingWindow"]["y"] == {"SetFixed": 1440.0 - 360.0}
