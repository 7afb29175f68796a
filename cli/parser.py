"""Command parser for CLI input."""

import shlex

from cli.constants import FOLLOWER_ROLE_FLAG, LEADER_ROLE_FLAG
from cli.models import (
    AddPatternCommand,
    CommandRequest,
    ListPatternsCommand,
    ProvisionCommand,
    RemovePatternCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "add-pattern":
        return _parse_add_pattern(tokens[1:])
    elif command_name == "remove-pattern":
        return _parse_remove_pattern(tokens[1:])
    elif command_name == "list-patterns":
        return _parse_list_patterns(tokens[1:])
    elif command_name == "provision":
        return _parse_provision(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _split_role_flags(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate --leader-role/--follower-role options from positional args."""
    positional = []
    roles = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in (LEADER_ROLE_FLAG, FOLLOWER_ROLE_FLAG):
            if i + 1 >= len(args):
                raise ParseError(f"{arg} requires a role name")
            if arg in roles:
                raise ParseError(f"{arg} given more than once")
            roles[arg] = args[i + 1]
            i += 2
            continue
        if arg.startswith("--"):
            raise ParseError(f"Unknown option: {arg}")
        positional.append(arg)
        i += 1
    return positional, roles


def _parse_add_pattern(args: list[str]) -> AddPatternCommand:
    """Parse 'add-pattern <connection> <name> <pattern> [role flags]' command."""
    positional, roles = _split_role_flags(args)
    if len(positional) != 3:
        raise ParseError("add-pattern requires exactly 3 arguments: <connection> <name> <pattern>")

    connection, name, pattern = positional
    return AddPatternCommand(
        connection=connection,
        name=name,
        pattern=pattern,
        leader_role=roles.get(LEADER_ROLE_FLAG),
        follower_role=roles.get(FOLLOWER_ROLE_FLAG),
    )


def _parse_remove_pattern(args: list[str]) -> RemovePatternCommand:
    """Parse 'remove-pattern <connection> <name> [role flags]' command."""
    positional, roles = _split_role_flags(args)
    if len(positional) != 2:
        raise ParseError("remove-pattern requires exactly 2 arguments: <connection> <name>")

    connection, name = positional
    return RemovePatternCommand(
        connection=connection,
        name=name,
        leader_role=roles.get(LEADER_ROLE_FLAG),
        follower_role=roles.get(FOLLOWER_ROLE_FLAG),
    )


def _parse_list_patterns(args: list[str]) -> ListPatternsCommand:
    """Parse 'list-patterns [connection]' command."""
    if len(args) > 1:
        raise ParseError("list-patterns takes at most 1 argument: [connection]")
    return ListPatternsCommand(connection=args[0] if args else None)


def _parse_provision(args: list[str]) -> ProvisionCommand:
    """Parse 'provision' command."""
    if args:
        raise ParseError("provision takes no arguments")
    return ProvisionCommand()
