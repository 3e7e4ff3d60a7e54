"""Types describing niri state, plus the error hierarchy."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any, NamedTuple

__all__ = [
    "ActionError",
    "CompositorUnavailable",
    "ConfigError",
    "DelegateError",
    "Direction",
    "ExitCode",
    "FocusedOutput",
    "FocusedWindow",
    "NiriHelperError",
    "OutputGeometry",
    "PreconditionError",
    "ProtocolError",
    "QueryMissError",
    "ScrollingPosition",
    "UsageError",
]

JSONAction = dict[str, Any]


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Invalid or missing arguments
    CONFIG_ERROR = 2  # Unreadable or invalid configuration
    CONNECTION_ERROR = 3  # Cannot reach the compositor
    COMMAND_ERROR = 4  # Command execution failed
    INTERRUPTED = 130


class Direction(StrEnum):
    """Screen edge a floating window is snapped to."""

    LEFT = "left"
    DOWN = "down"
    UP = "up"
    RIGHT = "right"


class ScrollingPosition(NamedTuple):
    """1-based (workspace, column) position in the scrolling layout."""

    workspace: int
    column: int


@dataclass(frozen=True)
class FocusedWindow:
    """The focused window, as far as nirihelper cares."""

    id: int
    is_floating: bool
    tile_size: tuple[float, float]
    scrolling_position: ScrollingPosition | None = None

    @property
    def tile_width(self) -> float:
        return self.tile_size[0]

    @property
    def tile_height(self) -> float:
        return self.tile_size[1]

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FocusedWindow":
        """Build from niri's window object.

        Raises:
            KeyError, TypeError, ValueError: on malformed payloads
        """
        layout = data.get("layout") or {}
        width, height = layout.get("tile_size") or (0.0, 0.0)
        pos = layout.get("pos_in_scrolling_layout")
        return cls(
            id=int(data["id"]),
            is_floating=bool(data["is_floating"]),
            tile_size=(float(width), float(height)),
            scrolling_position=ScrollingPosition(int(pos[0]), int(pos[1])) if pos else None,
        )


@dataclass(frozen=True)
class OutputGeometry:
    """Logical rectangle of an output in the global coordinate space."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class FocusedOutput:
    """The focused output. `logical` is None for outputs niri can't place."""

    name: str
    logical: OutputGeometry | None = None

    @property
    def geometry(self) -> OutputGeometry:
        """Logical geometry, zero-origin and zero-sized when unknown."""
        return self.logical or OutputGeometry()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "FocusedOutput":
        logical = data.get("logical")
        return cls(
            name=str(data.get("name", "")),
            logical=OutputGeometry(
                x=float(logical.get("x", 0)),
                y=float(logical.get("y", 0)),
                width=float(logical.get("width", 0)),
                height=float(logical.get("height", 0)),
            )
            if logical
            else None,
        )


class NiriHelperError(Exception):
    """Base class for failures reported to the user."""

    exit_code: ExitCode = ExitCode.COMMAND_ERROR


class UsageError(NiriHelperError):
    """Bad or missing command line arguments."""

    exit_code = ExitCode.USAGE_ERROR


class ConfigError(NiriHelperError):
    """Configuration file can't be read or holds invalid values."""

    exit_code = ExitCode.CONFIG_ERROR


class CompositorUnavailable(NiriHelperError):
    """niri's socket is unknown, missing or refused the connection."""

    exit_code = ExitCode.CONNECTION_ERROR


class QueryMissError(NiriHelperError):
    """A query returned nothing where something was required."""


class PreconditionError(NiriHelperError):
    """The focused window is in a state the command refuses to handle."""


class ProtocolError(NiriHelperError):
    """niri replied with an error or with something we can't decode."""


class ActionError(ProtocolError):
    """niri rejected an action."""

    def __init__(self, action: JSONAction, message: str) -> None:
        super().__init__(message)
        self.action = action
        self.message = message


class DelegateError(NiriHelperError):
    """The external helper could not be launched."""
