"""Action building for niri requests.

Builders return plain dicts ready to be wrapped in an `{"Action": ...}`
request. `parse_action` turns a command line such as
`focus-workspace 3` or `move-column-left` into the same kind of dict.
"""

import json
import re
from collections.abc import Sequence
from typing import Any

from .models import UsageError

__all__ = [
    "adjust_fixed",
    "consume_window_into_column",
    "focus_column_left",
    "focus_window",
    "move_floating_window",
    "move_window_up",
    "parse_action",
    "set_fixed",
]

# Actions taking one positional argument: variant -> (field, converter name)
POSITIONAL_FIELDS: dict[str, tuple[str, str]] = {
    "FocusWorkspace": ("reference", "workspace"),
    "MoveWindowToWorkspace": ("reference", "workspace"),
    "MoveColumnToWorkspace": ("reference", "workspace"),
    "SetWorkspaceName": ("name", "str"),
    "SetColumnWidth": ("change", "size"),
    "SetWindowWidth": ("change", "size"),
    "SetWindowHeight": ("change", "size"),
    "Spawn": ("command", "argv"),
    "SpawnSh": ("command", "str"),
}

# Fields niri requires although the command line makes them optional
DEFAULT_FIELDS: dict[str, dict[str, Any]] = {
    "MoveWindowToWorkspace": {"focus": True},
    "MoveColumnToWorkspace": {"focus": True},
}

_SIZE_RE = re.compile(r"^([+-]?)(\d+(?:\.\d+)?)(%?)$")


def set_fixed(value: float) -> dict[str, float]:
    """Absolute position change."""
    return {"SetFixed": float(value)}


def adjust_fixed(delta: float) -> dict[str, float]:
    """Relative position change."""
    return {"AdjustFixed": float(delta)}


def move_floating_window(window_id: int, x: dict[str, float], y: dict[str, float]) -> dict:
    """Build a MoveFloatingWindow action.

    Args:
        window_id: niri window id
        x: position change for the x axis (see `set_fixed` / `adjust_fixed`)
        y: position change for the y axis

    Returns:
        Niri action dict
    """
    return {"MoveFloatingWindow": {"id": window_id, "x": x, "y": y}}


def move_window_up() -> dict:
    return {"MoveWindowUp": {}}


def focus_column_left() -> dict:
    return {"FocusColumnLeft": {}}


def consume_window_into_column() -> dict:
    return {"ConsumeWindowIntoColumn": {}}


def focus_window(window_id: int) -> dict:
    return {"FocusWindow": {"id": window_id}}


def to_variant_name(name: str) -> str:
    """Convert `focus-column-left` (or `focus_column_left`) to `FocusColumnLeft`."""
    return "".join(part.capitalize() for part in re.split(r"[-_]", name) if part)


def coerce_value(text: str) -> bool | int | float | str:
    """Convert a command line value to the JSON type it most likely means."""
    lowered = text.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_workspace_reference(text: str) -> dict[str, Any]:
    """`3` is an index, anything else a workspace name."""
    if text.isdigit():
        return {"Index": int(text)}
    return {"Name": text}


def parse_size_change(text: str) -> dict[str, float | int]:
    """Parse niri's size change syntax.

    Eg.
        `50%` -> SetProportion, `+10%` -> AdjustProportion,
        `800` -> SetFixed, `-20` -> AdjustFixed
    """
    match = _SIZE_RE.match(text.strip())
    if not match:
        msg = f"invalid size change: {text!r}"
        raise UsageError(msg)
    sign, number, percent = match.groups()
    if percent:
        value: float | int = float(f"{sign}{number}")
        return {"AdjustProportion" if sign else "SetProportion": value}
    if "." in number:
        msg = f"fixed size change must be an integer: {text!r}"
        raise UsageError(msg)
    return {"AdjustFixed" if sign else "SetFixed": int(f"{sign}{number}")}


def _convert_positional(kind: str, values: list[str]) -> Any:  # noqa: ANN401
    if kind == "argv":
        return values
    if len(values) != 1:
        msg = f"expected exactly one argument, got {len(values)}"
        raise UsageError(msg)
    if kind == "workspace":
        return parse_workspace_reference(values[0])
    if kind == "size":
        return parse_size_change(values[0])
    return values[0]


def parse_action(tokens: Sequence[str]) -> dict[str, Any]:
    """Parse an action written on the command line.

    Args:
        tokens: action name followed by its arguments, or a single JSON object

    Returns:
        Niri action dict, eg. `{"FocusWindow": {"id": 3}}`

    Raises:
        UsageError: if the tokens don't describe an action
    """
    if not tokens:
        msg = "missing fallback action"
        raise UsageError(msg)

    first = tokens[0]
    if first.lstrip().startswith("{"):
        if len(tokens) > 1:
            msg = "a JSON action must be the only argument"
            raise UsageError(msg)
        try:
            action = json.loads(first)
        except json.JSONDecodeError as e:
            msg = f"invalid JSON action: {e}"
            raise UsageError(msg) from e
        if not isinstance(action, dict) or len(action) != 1:
            msg = 'a JSON action must be an object with a single variant, eg. {"FocusColumnLeft": {}}'
            raise UsageError(msg)
        return action

    if first.startswith("-"):
        msg = f"expected an action name, got option {first!r}"
        raise UsageError(msg)

    variant = to_variant_name(first)
    fields: dict[str, Any] = dict(DEFAULT_FIELDS.get(variant, {}))
    positional: list[str] = []
    rest = list(tokens[1:])
    if POSITIONAL_FIELDS.get(variant, ("", ""))[1] == "argv":
        # the command line is taken verbatim, options included
        if rest and rest[0] == "--":
            rest.pop(0)
        positional, rest = rest, []
    while rest:
        token = rest.pop(0)
        if token == "--":
            positional.extend(rest)
            break
        if token.startswith("--") and len(token) > 2:  # noqa: PLR2004
            name, sep, value = token[2:].partition("=")
            key = name.replace("-", "_")
            if sep:
                fields[key] = coerce_value(value)
            elif rest and not rest[0].startswith("--"):
                fields[key] = coerce_value(rest.pop(0))
            else:
                fields[key] = True
        else:
            positional.append(token)

    if positional:
        if variant not in POSITIONAL_FIELDS:
            msg = f"{first} takes no positional arguments (got {' '.join(positional)!r})"
            raise UsageError(msg)
        field, kind = POSITIONAL_FIELDS[variant]
        fields[field] = _convert_positional(kind, positional)

    return {variant: fields}
