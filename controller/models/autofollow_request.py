"""Request for adding or removing an auto-follow pattern."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from common.constants import FOLLOWER_FGAC_ROLE, LEADER_FGAC_ROLE
from common.exceptions import MalformedRequestError
from common.protocol import StreamInput, StreamOutput
from controller.schemas.autofollow import AutoFollowPatternBody, FgacRolesBody


class Action(Enum):
    """What the request does. Declaration order is the wire ordinal."""
    ADD = "add"
    REMOVE = "remove"


def parse_fgac_roles(roles: Optional[FgacRolesBody]) -> Optional[Dict[str, Optional[str]]]:
    """
    Turn a parsed `assume_roles` object into a role map.

    Only the keys present in the body end up in the map, so a partial pair
    stays partial and is caught by validation.
    """
    if roles is None:
        return None
    return roles.model_dump(exclude_unset=True)


@dataclass
class UpdateAutoFollowPatternRequest:
    """
    Add or remove a named auto-follow pattern for a leader connection.

    `assume_roles` is {leader_fgac_role: role, follower_fgac_role: role} when
    role delegation was requested, None otherwise. It is not part of the
    binary form: see `write_to`.
    """
    connection: Optional[str]
    pattern_name: Optional[str]
    pattern: Optional[str]
    action: Action
    assume_roles: Optional[Dict[str, Optional[str]]] = None

    @classmethod
    def from_body(cls, body: Any, action: Action) -> 'UpdateAutoFollowPatternRequest':
        """
        Build a request from a decoded JSON body.

        Args:
            body: Decoded request body
            action: Operation chosen by the endpoint, never read from the body

        Returns:
            Populated request (not yet validated)

        Raises:
            MalformedRequestError: If the body has unknown fields or wrong types
        """
        try:
            parsed = AutoFollowPatternBody.model_validate(body)
        except ValidationError as e:
            raise MalformedRequestError(f"Failed to parse auto-follow request: {e}") from e

        assume_roles = parse_fgac_roles(parsed.assume_roles)
        if not assume_roles:
            assume_roles = None

        return cls(
            connection=parsed.connection,
            pattern_name=parsed.name,
            pattern=parsed.pattern,
            action=action,
            assume_roles=assume_roles,
        )

    @classmethod
    def from_json(cls, data: Union[bytes, str], action: Action) -> 'UpdateAutoFollowPatternRequest':
        """Parse a raw JSON document. See `from_body`."""
        try:
            body = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedRequestError(f"Request body is not valid JSON: {e}") from e
        return cls.from_body(body, action)

    def validate(self) -> List[str]:
        """
        Check the business rules.

        Returns:
            Every violation found, empty when the request is valid
        """
        errors = []
        if not self.connection or not self.pattern_name:
            errors.append("Missing connection or name in the request")

        if self.assume_roles is not None and (
            len(self.assume_roles) < 2
            or self.assume_roles.get(LEADER_FGAC_ROLE) is None
            or self.assume_roles.get(FOLLOWER_FGAC_ROLE) is None
        ):
            errors.append(f"Need roles for {LEADER_FGAC_ROLE} and {FOLLOWER_FGAC_ROLE}")

        if self.action == Action.REMOVE:
            if self.pattern is not None:
                errors.append("Unexpected pattern")
        elif self.pattern is None:
            errors.append("Missing pattern")

        return errors

    def write_to(self, out: StreamOutput) -> None:
        """
        Write the forwarding form of a validated request.

        `assume_roles` is deliberately left out: role delegation is checked
        when the request is admitted and is not re-sent between nodes.
        """
        out.write_string(self.connection)
        out.write_string(self.pattern_name)
        out.write_optional_string(self.pattern)
        out.write_enum(self.action)

    @classmethod
    def read_from(cls, inp: StreamInput) -> 'UpdateAutoFollowPatternRequest':
        connection = inp.read_string()
        pattern_name = inp.read_string()
        pattern = inp.read_optional_string()
        action = inp.read_enum(Action)
        return cls(
            connection=connection,
            pattern_name=pattern_name,
            pattern=pattern,
            action=action,
        )

    def to_bytes(self) -> bytes:
        out = StreamOutput()
        self.write_to(out)
        return out.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'UpdateAutoFollowPatternRequest':
        """
        Decode a payload produced by `to_bytes`.

        Raises:
            TruncatedOrCorruptError: On short, malformed or over-long payloads
        """
        inp = StreamInput(data)
        request = cls.read_from(inp)
        inp.ensure_consumed()
        return request
