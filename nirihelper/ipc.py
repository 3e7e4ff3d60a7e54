"""Interact with niri using its IPC socket.

niri speaks newline-delimited JSON: one request per line, one reply per line.
Replies are either `{"Ok": payload}` or `{"Err": "message"}`.
"""

__all__ = ["NiriSession", "get_socket_path", "niri_session"]

import asyncio
import json
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging import Logger
from typing import Any

from .constants import NIRI_SOCKET_ENV
from .logging_setup import get_logger
from .models import ActionError, CompositorUnavailable, FocusedOutput, FocusedWindow, ProtocolError

JSONRequest = str | dict[str, Any]


def get_socket_path(override: str | None = None) -> str:
    """Return the path of niri's socket.

    Args:
        override: explicit path, takes precedence over the environment

    Raises:
        CompositorUnavailable: if no path is known
    """
    path = override or os.environ.get(NIRI_SOCKET_ENV, "")
    if not path:
        msg = f"${NIRI_SOCKET_ENV} is not set, is niri running ?"
        raise CompositorUnavailable(msg)
    return path


class NiriSession:
    """A single connection to niri, used for strictly sequential requests."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, logger: Logger) -> None:
        self.reader = reader
        self.writer = writer
        self.log = logger

    async def request(self, request: JSONRequest) -> Any:  # noqa: ANN401
        """Send `request` and return the `Ok` payload.

        Raises:
            ProtocolError: niri answered `Err` or something undecodable
            CompositorUnavailable: the connection dropped
        """
        self.log.debug("-> %s", request)
        self.writer.write(json.dumps(request).encode() + b"\n")
        try:
            await self.writer.drain()
            line = await self.reader.readline()
        except (ConnectionError, OSError) as e:
            msg = f"lost connection to niri: {e}"
            raise CompositorUnavailable(msg) from e
        except (ValueError, asyncio.LimitOverrunError) as e:
            msg = f"reply from niri is too long: {e}"
            raise ProtocolError(msg) from e
        if not line.endswith(b"\n"):
            msg = "niri closed the connection before replying"
            raise CompositorUnavailable(msg)

        self.log.debug("<- %s", line.rstrip().decode("utf-8", errors="replace"))
        try:
            reply = json.loads(line)
        except json.JSONDecodeError as e:
            msg = f"invalid reply from niri: {e}"
            raise ProtocolError(msg) from e

        if isinstance(reply, dict) and "Ok" in reply:
            return reply["Ok"]
        if isinstance(reply, dict) and "Err" in reply:
            raise ProtocolError(str(reply["Err"]))
        msg = f"unexpected reply from niri: {reply!r}"
        raise ProtocolError(msg)

    async def _query(self, variant: str) -> Any:  # noqa: ANN401
        payload = await self.request(variant)
        if not isinstance(payload, dict) or variant not in payload:
            msg = f"failed to receive response: expected {variant}, got {payload!r}"
            raise ProtocolError(msg)
        return payload[variant]

    async def query_focused_window(self) -> FocusedWindow | None:
        """Return the focused window, or None if nothing has focus."""
        data = await self._query("FocusedWindow")
        if data is None:
            return None
        try:
            return FocusedWindow.from_json(data)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            msg = f"malformed window in reply: {data!r}"
            raise ProtocolError(msg) from e

    async def query_focused_output(self) -> FocusedOutput | None:
        """Return the focused output, or None if niri reports none."""
        data = await self._query("FocusedOutput")
        if data is None:
            return None
        try:
            return FocusedOutput.from_json(data)
        except (AttributeError, TypeError, ValueError) as e:
            msg = f"malformed output in reply: {data!r}"
            raise ProtocolError(msg) from e

    async def send_action(self, action: dict[str, Any]) -> None:
        """Run an action.

        Raises:
            ActionError: if niri rejects it
        """
        try:
            await self.request({"Action": action})
        except ProtocolError as e:
            raise ActionError(action, str(e)) from e

    async def close(self) -> None:
        self.writer.close()
        await self.writer.wait_closed()


@asynccontextmanager
async def niri_session(socket_path: str | None = None, logger: Logger | None = None) -> AsyncIterator[NiriSession]:
    """Open a session on niri's socket, closing it on exit.

    Args:
        socket_path: explicit socket path, defaults to $NIRI_SOCKET
        logger: logger to use, defaults to the "ipc" logger

    Raises:
        CompositorUnavailable: if the socket can't be reached
    """
    logger = logger or get_logger("ipc")
    path = get_socket_path(socket_path)
    try:
        reader, writer = await asyncio.open_unix_connection(path)
    except (FileNotFoundError, ConnectionRefusedError) as e:
        logger.debug("connection to %s failed: %s", path, e)
        msg = f"cannot connect to niri at {path}, is it running ?"
        raise CompositorUnavailable(msg) from e
    except OSError as e:
        msg = f"cannot connect to niri at {path}: {e}"
        raise CompositorUnavailable(msg) from e

    session = NiriSession(reader, writer, logger)
    try:
        yield session
    finally:
        await session.close()
