"""Command line parsing.

Turns `sys.argv[1:]` into global options plus exactly one intent. Nothing
here talks to niri.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from .actions import parse_action
from .handlers import Handlers
from .models import Direction, UsageError
from .version import VERSION

__all__ = [
    "COMMANDS",
    "ConsumeIntoLeft",
    "FloatingSnapOr",
    "Invocation",
    "ShowHelp",
    "ShowVersion",
    "ToggleFollowMode",
    "get_help",
    "parse_args",
    "parse_docstring",
    "use_param",
    "version_string",
]

# Regex pattern to match args: <required> or [optional]
_ARG_PATTERN = re.compile(r"([<\[])([^>\]]+)([>\]])")

USAGE = "Usage: nirihelper [--debug <logfile>] [--config <file>] [--socket <path>] <command> [args]"


@dataclass(frozen=True)
class FloatingSnapOr:
    direction: Direction
    fallback: dict[str, Any]


@dataclass(frozen=True)
class ToggleFollowMode:
    pass


@dataclass(frozen=True)
class ConsumeIntoLeft:
    pass


@dataclass(frozen=True)
class ShowHelp:
    pass


@dataclass(frozen=True)
class ShowVersion:
    pass


Intent = FloatingSnapOr | ToggleFollowMode | ConsumeIntoLeft | ShowHelp | ShowVersion


@dataclass
class Invocation:
    """Everything the command line asked for."""

    intent: Intent
    debug_file: str = ""
    config_file: str = ""
    socket_path: str = ""


# command name -> handler method name
COMMANDS: dict[str, str] = {
    "floating-snap-or": "run_floating_snap_or",
    "toggle-follow-mode": "run_toggle_follow_mode",
    "consume-into-left": "run_consume_into_left",
}


def parse_docstring(docstring: str | None) -> tuple[list[str], str]:
    """Split the first docstring line into its leading arguments and description.

    Eg. "<direction> [x] Move it" -> (["<direction>", "[x]"], "Move it")
    """
    if not docstring:
        return [], "No description available."
    first_line = docstring.strip().split("\n")[0].strip()
    args: list[str] = []
    last_end = 0
    for match in _ARG_PATTERN.finditer(first_line):
        if first_line[last_end : match.start()].strip():
            break
        args.append(match.group(0))
        last_end = match.end()
    description = first_line[last_end:].strip() or first_line
    return args, description


def get_help() -> str:
    """Return the help text, built from the handlers' docstrings."""
    lines = [
        USAGE,
        "",
        "Global options:",
        f" {'--debug <logfile>':24s} Enable debug logs, also written to <logfile>",
        f" {'--config <file>':24s} Use another configuration file",
        f" {'--socket <path>':24s} niri socket (default: $NIRI_SOCKET)",
        f" {'--version':24s} Show the version",
        "",
        "Commands:",
    ]
    for name, method in COMMANDS.items():
        args, description = parse_docstring(getattr(Handlers, method).__doc__)
        if name == "floating-snap-or":
            args = ["--direction <left|down|up|right>", *args[1:]]
        syntax = " ".join([name, *args])
        lines.append(f" {syntax}\n     {description}")
    lines.append(f" {'help':24s} Show this help")
    return "\n".join(lines)


def use_param(args: list[str], txt: str) -> str:
    """Check if parameter `txt` is in `args`.

    If found, removes it from `args` and returns the argument value.
    Also accepts the `--name=value` form.

    Raises:
        UsageError: if the option has no value
    """
    for i, arg in enumerate(args):
        if arg == txt:
            if i + 1 >= len(args):
                msg = f"option {txt} requires a value"
                raise UsageError(msg)
            value = args[i + 1]
            del args[i : i + 2]
            return value
        if arg.startswith(f"{txt}="):
            del args[i]
            return arg[len(txt) + 1 :]
    return ""


def _split_globals(argv: list[str]) -> tuple[dict[str, str], list[str]]:
    """Extract global options, which must come before the command name."""
    head: list[str] = []
    rest = list(argv)
    while rest and rest[0].startswith("-"):
        head.append(rest.pop(0))
        if "=" not in head[-1] and head[-1] in {"--debug", "--config", "--socket"} and rest:
            head.append(rest.pop(0))

    options = {name: use_param(head, f"--{name}") for name in ("debug", "config", "socket")}
    return options, head + rest


def parse_direction(value: str) -> Direction:
    try:
        return Direction(value.lower())
    except ValueError as e:
        choices = ", ".join(d.value for d in Direction)
        msg = f"invalid value {value!r} for --direction (choose from {choices})"
        raise UsageError(msg) from e


def _parse_floating_snap_or(args: list[str]) -> FloatingSnapOr:
    direction: Direction | None = None
    rest = list(args)
    while rest and rest[0].startswith("-"):
        option = rest.pop(0)
        name, sep, value = option.partition("=")
        if name not in {"--direction", "-d"}:
            msg = f"unexpected option {option!r} for floating-snap-or (expected --direction/-d)"
            raise UsageError(msg)
        if not sep:
            if not rest:
                msg = "option --direction requires a value"
                raise UsageError(msg)
            value = rest.pop(0)
        direction = parse_direction(value)

    if direction is None:
        msg = "missing required option --direction <left|down|up|right>"
        raise UsageError(msg)
    if not rest:
        msg = "missing fallback action for floating-snap-or"
        raise UsageError(msg)
    return FloatingSnapOr(direction=direction, fallback=parse_action(rest))


def parse_args(argv: list[str]) -> Invocation:
    """Parse the command line (without the program name).

    Raises:
        UsageError: with a message naming the offending argument
    """
    options, args = _split_globals(argv)
    invocation = Invocation(
        intent=ShowHelp(),
        debug_file=options["debug"],
        config_file=options["config"],
        socket_path=options["socket"],
    )

    if not args:
        msg = "missing command, expected one of: " + ", ".join(COMMANDS)
        raise UsageError(msg)

    command, rest = args[0], args[1:]
    if command in {"--help", "-h", "help"}:
        return invocation
    if command in {"--version", "-V", "version"}:
        invocation.intent = ShowVersion()
        return invocation

    if command.startswith("-"):
        msg = f"unknown option {command!r}"
        raise UsageError(msg)

    name = command.replace("_", "-")
    if name not in COMMANDS:
        msg = f"unknown command {command!r}, expected one of: " + ", ".join(COMMANDS)
        raise UsageError(msg)

    if name == "floating-snap-or":
        invocation.intent = _parse_floating_snap_or(rest)
    elif rest:
        msg = f"{name} takes no arguments (got {' '.join(rest)!r})"
        raise UsageError(msg)
    elif name == "toggle-follow-mode":
        invocation.intent = ToggleFollowMode()
    else:
        invocation.intent = ConsumeIntoLeft()
    return invocation


def version_string() -> str:
    return f"nirihelper {VERSION}"
