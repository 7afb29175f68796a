"""Admission and application of auto-follow pattern updates."""

from typing import List, Optional

from common.exceptions import ValidationFailureError
from common.logging_config import get_logger
from common.types import AutoFollowPattern
from controller.models.autofollow_request import Action, UpdateAutoFollowPatternRequest
from controller.repositories.autofollow_repository import AutoFollowPatternRepository

logger = get_logger(__name__)


class AutoFollowService:
    """
    Validates incoming requests on the receiving node, forwards them to the
    master in binary form and applies them there.

    Forwarding is modelled in-process: the request is encoded and decoded
    exactly as it would be between nodes, so whatever the master applies is
    what survived the wire.
    """

    def __init__(self, repository: Optional[AutoFollowPatternRepository] = None):
        self.repository = repository if repository is not None else AutoFollowPatternRepository()

    def update(self, request: UpdateAutoFollowPatternRequest) -> None:
        """
        Admit and apply one request.

        Raises:
            ValidationFailureError: With every rule the request breaks
            AutoFollowPatternExistsError: ADD of a registered name
            AutoFollowPatternNotFoundError: REMOVE of an unknown name
            TruncatedOrCorruptError: If the forwarded payload cannot be decoded
        """
        errors = request.validate()
        if errors:
            logger.warning(
                f"Rejected auto-follow {request.action.name} request "
                f"[connection={request.connection}] [name={request.pattern_name}] errors={errors}"
            )
            raise ValidationFailureError(errors)

        payload = request.to_bytes()
        logger.debug(f"Forwarding auto-follow {request.action.name} to master ({len(payload)} bytes)")
        self._apply_on_master(payload, request.assume_roles)

    def _apply_on_master(self, payload: bytes, assume_roles) -> None:
        forwarded = UpdateAutoFollowPatternRequest.from_bytes(payload)

        if forwarded.action == Action.ADD:
            # Roles are not on the wire; the admitting node hands them over alongside.
            self.repository.add(
                forwarded.connection,
                forwarded.pattern_name,
                forwarded.pattern,
                assume_roles=assume_roles,
            )
        else:
            self.repository.remove(forwarded.connection, forwarded.pattern_name)

    def list_patterns(self, connection: Optional[str] = None) -> List[AutoFollowPattern]:
        return self.repository.list_patterns(connection)
