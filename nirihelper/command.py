"""nirihelper - entry point."""

import asyncio
import sys

from .cli import ConsumeIntoLeft, FloatingSnapOr, Invocation, ShowHelp, ShowVersion, ToggleFollowMode, USAGE, get_help, parse_args, version_string
from .config import load_config
from .delegate import HelperProcess
from .handlers import Handlers
from .ipc import niri_session
from .logging_setup import get_logger, init_logger
from .models import ExitCode, NiriHelperError, UsageError

__all__ = ["main", "run_command"]


async def run_command(invocation: Invocation) -> None:
    """Load the configuration, connect to niri and run the requested command."""
    config = await load_config(invocation.config_file or None)
    follow_mode = config["follow_mode"]
    delegate = HelperProcess(follow_mode.get_str("helper"), follow_mode.get_str("subcommand"))

    async with niri_session(invocation.socket_path or None) as session:
        handlers = Handlers(session, delegate, config)
        match invocation.intent:
            case FloatingSnapOr(direction=direction, fallback=fallback):
                await handlers.run_floating_snap_or(direction, fallback)
            case ToggleFollowMode():
                await handlers.run_toggle_follow_mode()
            case ConsumeIntoLeft():
                await handlers.run_consume_into_left()
            case _:
                msg = f"not a niri command: {invocation.intent}"
                raise UsageError(msg)


def main(argv: list[str] | None = None) -> None:
    """Run the command."""
    args = sys.argv[1:] if argv is None else argv
    init_logger()
    log = get_logger()

    try:
        invocation = parse_args(args)
    except UsageError as e:
        print(f"Error: {e}\n{USAGE}", file=sys.stderr)
        sys.exit(e.exit_code)

    if invocation.debug_file:
        init_logger(filename=invocation.debug_file, force_debug=True)
        log = get_logger()

    if isinstance(invocation.intent, ShowHelp):
        print(get_help())
        sys.exit(ExitCode.SUCCESS)
    if isinstance(invocation.intent, ShowVersion):
        print(version_string())
        sys.exit(ExitCode.SUCCESS)

    log.debug("running %s", invocation.intent)
    try:
        asyncio.run(run_command(invocation))
    except KeyboardInterrupt:
        sys.exit(ExitCode.INTERRUPTED)
    except NiriHelperError as e:
        log.debug("%s: %s", type(e).__name__, e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except Exception:  # pylint: disable=W0718
        log.critical("Unhandled exception:", exc_info=True)
        sys.exit(ExitCode.COMMAND_ERROR)
    sys.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
