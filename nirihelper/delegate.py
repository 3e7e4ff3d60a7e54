"""External helper invocation.

Follow mode is implemented by a separate program (nirius by default).
Handlers only see an awaitable "invoke toggle" callable so tests can pass
a fake one.
"""

__all__ = ["HelperProcess", "ToggleDelegate"]

import asyncio
from collections.abc import Awaitable, Callable
from logging import Logger

from .constants import DEFAULT_FOLLOW_MODE_HELPER, DEFAULT_FOLLOW_MODE_SUBCOMMAND
from .logging_setup import get_logger
from .models import DelegateError

ToggleDelegate = Callable[[], Awaitable[object]]


class HelperProcess:
    """Runs `<binary> <subcommand>` with the caller's standard streams.

    Usage:
        helper = HelperProcess("nirius", "toggle-follow-mode")
        await helper()
    """

    def __init__(
        self,
        binary: str = DEFAULT_FOLLOW_MODE_HELPER,
        subcommand: str = DEFAULT_FOLLOW_MODE_SUBCOMMAND,
        logger: Logger | None = None,
    ) -> None:
        self.binary = binary
        self.subcommand = subcommand
        self.log = logger or get_logger("delegate")

    @property
    def argv(self) -> list[str]:
        return [self.binary, self.subcommand]

    async def __call__(self) -> int:
        """Spawn the helper and wait for it.

        Returns:
            The helper exit code, not otherwise interpreted

        Raises:
            DelegateError: if the helper can't be launched
        """
        self.log.debug("spawning %s", " ".join(self.argv))
        try:
            # stdin/stdout/stderr left to None are inherited
            proc = await asyncio.create_subprocess_exec(*self.argv)
        except FileNotFoundError as e:
            msg = f"{self.binary} not found, is it installed ?"
            raise DelegateError(msg) from e
        except OSError as e:
            msg = f"failed to run {self.binary}: {e}"
            raise DelegateError(msg) from e

        returncode = await proc.wait()
        if returncode:
            self.log.debug("%s exited with code %s", self.binary, returncode)
        return returncode
