"""Command handlers.

Each `run_*` method implements one command: it queries niri for the focused
window (and output), decides what to do and sends the resulting actions.
The first docstring line of a handler is its help text.
"""

from __future__ import annotations

from logging import Logger
from typing import TYPE_CHECKING, Any

from . import actions
from .config import Configuration, Margins, default_config
from .logging_setup import get_logger
from .models import ActionError, Direction, FocusedOutput, FocusedWindow, PreconditionError, QueryMissError

if TYPE_CHECKING:
    from .delegate import ToggleDelegate
    from .ipc import NiriSession

__all__ = ["Handlers", "snap_action"]


def snap_action(window: FocusedWindow, output: FocusedOutput, direction: Direction, margins: Margins) -> dict[str, Any]:
    """Compute the move bringing `window` flush against one edge of `output`.

    Only the axis matching `direction` is set (in absolute coordinates), the
    other one is adjusted by zero so the window keeps its current position on it.
    """
    geo = output.geometry
    x = actions.adjust_fixed(0)
    y = actions.adjust_fixed(0)
    match direction:
        case Direction.LEFT:
            x = actions.set_fixed(geo.x + margins.left)
        case Direction.RIGHT:
            x = actions.set_fixed(geo.x + geo.width - margins.right - window.tile_width)
        case Direction.UP:
            y = actions.set_fixed(geo.y + margins.top)
        case Direction.DOWN:
            y = actions.set_fixed(geo.y + geo.height - margins.bottom - window.tile_height)
    return actions.move_floating_window(window.id, x, y)


class Handlers:
    """Command implementations bound to one niri session."""

    def __init__(
        self,
        session: NiriSession,
        delegate: ToggleDelegate,
        config: dict[str, Configuration] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.session = session
        self.delegate = delegate
        self.log = logger or get_logger("handlers")
        self.config = config or default_config(self.log)

    async def _focused_window(self) -> FocusedWindow:
        window = await self.session.query_focused_window()
        if window is None:
            msg = "failed to receive response: no focused window"
            raise QueryMissError(msg)
        return window

    async def run_floating_snap_or(self, direction: Direction, fallback: dict[str, Any]) -> None:
        """<direction> <action...> Snap the focused floating window to a screen edge, else run <action>.

        <direction> is one of left, down, up or right. <action> is a niri action
        such as `focus-column-left`, used when the focused window is tiled.
        """
        window = await self._focused_window()
        if not window.is_floating:
            self.log.debug("window %s is tiled, running fallback %s", window.id, fallback)
            await self.session.send_action(fallback)
            return

        output = await self.session.query_focused_output()
        if output is None:
            msg = "failed to receive response: no focused output"
            raise QueryMissError(msg)

        margins = Margins.from_config(self.config["margins"])
        action = snap_action(window, output, direction, margins)
        self.log.debug("snapping window %s %s on %s", window.id, direction, output.name)
        await self.session.send_action(action)

    async def run_toggle_follow_mode(self) -> None:
        """Toggle window follow mode, only when the focused window is floating.

        Requires the helper program (nirius by default) to be installed.
        """
        window = await self._focused_window()
        if not window.is_floating:
            self.log.info("window %s is not floating, follow mode unchanged", window.id)
            return
        await self.delegate()

    async def run_consume_into_left(self) -> None:
        """Consume the focused window into the column on its left.

        The window is first moved to the top of its column so the consumed
        window lands in the left column as a whole.
        """
        window = await self._focused_window()
        if window.is_floating:
            msg = "cannot consume a floating window"
            raise PreconditionError(msg)

        position = window.scrolling_position
        if position is not None:
            # checks the workspace index although the message talks about columns
            if position.workspace == 1:
                msg = "cannot consume a window in the first column into left"
                raise PreconditionError(msg)
            for _ in range(position.column - 1):
                await self.session.send_action(actions.move_window_up())

        strict = self.config["consume"].get_bool("strict")
        for action in (
            actions.focus_column_left(),
            actions.consume_window_into_column(),
            actions.focus_window(window.id),
        ):
            try:
                await self.session.send_action(action)
            except ActionError as e:
                if strict:
                    raise
                # best effort: the layout may already have changed
                self.log.warning("ignoring failed action %s: %s", action, e.message)
