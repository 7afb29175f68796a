"""Tests for the CLI command parser."""

import pytest

from cli.models import (
    AddPatternCommand,
    CommandRequest,
    ListPatternsCommand,
    ProvisionCommand,
    RemovePatternCommand,
)
from cli.parser import ParseError, parse_command


def test_parse_add_pattern():
    cmd = parse_command("add-pattern leader1 logs 'logs-*'")

    assert cmd == AddPatternCommand(connection='leader1', name='logs', pattern='logs-*')


def test_parse_add_pattern_with_roles():
    cmd = parse_command("add-pattern leader1 logs logs-* --leader-role L --follower-role F")

    assert cmd.leader_role == 'L'
    assert cmd.follower_role == 'F'
    assert cmd.pattern == 'logs-*'


def test_parse_role_flags_before_positionals():
    cmd = parse_command("remove-pattern --follower-role F leader1 logs")

    assert cmd == RemovePatternCommand(connection='leader1', name='logs', follower_role='F')


def test_parse_remove_pattern():
    cmd = parse_command("remove-pattern leader1 logs")

    assert cmd == RemovePatternCommand(connection='leader1', name='logs')


def test_parse_list_patterns():
    assert parse_command("list-patterns") == ListPatternsCommand()
    assert parse_command("list-patterns leader1") == ListPatternsCommand(connection='leader1')


def test_parse_provision():
    assert parse_command("provision") == ProvisionCommand()


@pytest.mark.parametrize('line', [
    "",
    "   ",
    "unknown",
    "add-pattern leader1 logs",
    "add-pattern leader1 logs logs-* extra",
    "add-pattern leader1 logs logs-* --leader-role",
    "add-pattern leader1 logs logs-* --leader-role A --leader-role B",
    "add-pattern leader1 logs logs-* --role X",
    "remove-pattern leader1",
    "list-patterns a b",
    "provision now",
    "add-pattern 'unterminated",
])
def test_parse_errors(line):
    with pytest.raises(ParseError):
        parse_command(line)


@pytest.mark.parametrize('line', [
    "add-pattern leader1 logs logs-*",
    "remove-pattern leader1 logs",
    "list-patterns",
    "provision",
])
def test_parsed_commands_are_command_requests(line):
    assert isinstance(parse_command(line), CommandRequest)
