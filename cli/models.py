"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class AddPatternCommand:
    """Register an auto-follow pattern."""

    connection: str
    name: str
    pattern: str
    leader_role: str | None = None
    follower_role: str | None = None
    command: Literal["add-pattern"] = "add-pattern"


@dataclass(frozen=True)
class RemovePatternCommand:
    """Remove an auto-follow pattern."""

    connection: str
    name: str
    leader_role: str | None = None
    follower_role: str | None = None
    command: Literal["remove-pattern"] = "remove-pattern"


@dataclass(frozen=True)
class ListPatternsCommand:
    """List auto-follow patterns, optionally for one connection."""

    connection: str | None = None
    command: Literal["list-patterns"] = "list-patterns"


@dataclass(frozen=True)
class ProvisionCommand:
    """Run the security provisioning sequence."""

    command: Literal["provision"] = "provision"


CommandRequest = (
    AddPatternCommand
    | RemovePatternCommand
    | ListPatternsCommand
    | ProvisionCommand
)
