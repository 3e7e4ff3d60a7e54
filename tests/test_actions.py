"""Tests for action builders and command line action parsing."""

import pytest

from nirihelper import actions
from nirihelper.actions import parse_action, parse_size_change, to_variant_name
from nirihelper.models import UsageError


def test_builders():
    assert actions.move_window_up() == {"MoveWindowUp": {}}
    assert actions.focus_column_left() == {"FocusColumnLeft": {}}
    assert actions.consume_window_into_column() == {"ConsumeWindowIntoColumn": {}}
    assert actions.focus_window(7) == {"FocusWindow": {"id": 7}}


def test_move_floating_window():
    action = actions.move_floating_window(3, actions.set_fixed(10), actions.adjust_fixed(0))
    assert action == {"MoveFloatingWindow": {"id": 3, "x": {"SetFixed": 10.0}, "y": {"AdjustFixed": 0.0}}}


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("focus-column-left", "FocusColumnLeft"),
        ("focus_window", "FocusWindow"),
        ("maximize-column", "MaximizeColumn"),
    ],
)
def test_to_variant_name(name, expected):
    assert to_variant_name(name) == expected


def test_parse_simple_action():
    assert parse_action(["focus-column-left"]) == {"FocusColumnLeft": {}}


def test_parse_options():
    assert parse_action(["focus-window", "--id", "42"]) == {"FocusWindow": {"id": 42}}
    assert parse_action(["focus-window", "--id=42"]) == {"FocusWindow": {"id": 42}}


def test_parse_bare_flag_and_bool():
    assert parse_action(["toggle-window-floating", "--id", "3", "--fake"]) == {"ToggleWindowFloating": {"id": 3, "fake": True}}
    assert parse_action(["move-column-to-workspace", "2", "--focus", "false"]) == {
        "MoveColumnToWorkspace": {"reference": {"Index": 2}, "focus": False}
    }


def test_parse_workspace_reference():
    assert parse_action(["focus-workspace", "3"]) == {"FocusWorkspace": {"reference": {"Index": 3}}}
    assert parse_action(["focus-workspace", "chat"]) == {"FocusWorkspace": {"reference": {"Name": "chat"}}}


def test_default_focus_field():
    assert parse_action(["move-window-to-workspace", "4"]) == {"MoveWindowToWorkspace": {"focus": True, "reference": {"Index": 4}}}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("50%", {"SetProportion": 50.0}),
        ("+10%", {"AdjustProportion": 10.0}),
        ("-5.5%", {"AdjustProportion": -5.5}),
        ("800", {"SetFixed": 800}),
        ("-20", {"AdjustFixed": -20}),
        ("+20", {"AdjustFixed": 20}),
    ],
)
def test_parse_size_change(text, expected):
    assert parse_size_change(text) == expected


def test_parse_size_change_invalid():
    with pytest.raises(UsageError, match="invalid size change"):
        parse_size_change("wide")
    with pytest.raises(UsageError, match="integer"):
        parse_size_change("10.5")


def test_parse_set_column_width():
    assert parse_action(["set-column-width", "-10%"]) == {"SetColumnWidth": {"change": {"AdjustProportion": -10.0}}}


def test_parse_spawn():
    assert parse_action(["spawn", "--", "foot", "-e", "htop"]) == {"Spawn": {"command": ["foot", "-e", "htop"]}}
    assert parse_action(["spawn", "alacritty"]) == {"Spawn": {"command": ["alacritty"]}}


def test_parse_spawn_keeps_options():
    assert parse_action(["spawn", "foot", "--title", "x"]) == {"Spawn": {"command": ["foot", "--title", "x"]}}
    assert parse_action(["spawn", "foot", "--app-id=term", "--", "htop"]) == {"Spawn": {"command": ["foot", "--app-id=term", "--", "htop"]}}


def test_parse_json_action():
    assert parse_action(['{"FocusWindow": {"id": 1}}']) == {"FocusWindow": {"id": 1}}


def test_parse_json_action_errors():
    with pytest.raises(UsageError, match="invalid JSON"):
        parse_action(["{not json"])
    with pytest.raises(UsageError, match="single variant"):
        parse_action(['{"A": {}, "B": {}}'])
    with pytest.raises(UsageError, match="only argument"):
        parse_action(['{"A": {}}', "extra"])


def test_parse_errors():
    with pytest.raises(UsageError, match="missing fallback action"):
        parse_action([])
    with pytest.raises(UsageError, match="takes no positional"):
        parse_action(["focus-column-left", "3"])
    with pytest.raises(UsageError, match="expected an action name"):
        parse_action(["--id", "3"])
    with pytest.raises(UsageError, match="exactly one argument"):
        parse_action(["focus-workspace", "1", "2"])
