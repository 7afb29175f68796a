"""
In-memory repository of auto-follow patterns held by the elected master.

Stands in for the replication metadata in cluster state. It only records
which rules exist; matching them against leader indices is the replication
engine's job.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from common.exceptions import AutoFollowPatternExistsError, AutoFollowPatternNotFoundError
from common.logging_config import get_logger
from common.types import AutoFollowPattern

logger = get_logger(__name__)


class AutoFollowPatternRepository:
    """
    Thread-safe map of (connection, name) to AutoFollowPattern.

    Names are unique per leader connection.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._patterns: Dict[Tuple[str, str], AutoFollowPattern] = {}

    def add(
        self,
        connection: str,
        name: str,
        pattern: str,
        assume_roles: Optional[Dict[str, str]] = None
    ) -> AutoFollowPattern:
        """
        Register a new pattern.

        Raises:
            AutoFollowPatternExistsError: If `name` is taken for `connection`
        """
        key = (connection, name)
        with self._lock:
            if key in self._patterns:
                raise AutoFollowPatternExistsError(
                    f"Auto-follow pattern '{name}' already exists for connection '{connection}'"
                )
            entry = AutoFollowPattern(
                connection=connection,
                name=name,
                pattern=pattern,
                created_at=datetime.now(timezone.utc),
                assume_roles=dict(assume_roles) if assume_roles else None,
            )
            self._patterns[key] = entry

        logger.info(f"Registered auto-follow pattern [connection={connection}] [name={name}] pattern={pattern}")
        return entry

    def remove(self, connection: str, name: str) -> AutoFollowPattern:
        """
        Unregister a pattern.

        Raises:
            AutoFollowPatternNotFoundError: If no such pattern is registered
        """
        with self._lock:
            entry = self._patterns.pop((connection, name), None)

        if entry is None:
            raise AutoFollowPatternNotFoundError(
                f"Auto-follow pattern '{name}' does not exist for connection '{connection}'"
            )
        logger.info(f"Removed auto-follow pattern [connection={connection}] [name={name}]")
        return entry

    def get(self, connection: str, name: str) -> Optional[AutoFollowPattern]:
        with self._lock:
            return self._patterns.get((connection, name))

    def list_patterns(self, connection: Optional[str] = None) -> List[AutoFollowPattern]:
        """Return registered patterns ordered by connection then name."""
        with self._lock:
            entries = list(self._patterns.values())
        if connection is not None:
            entries = [p for p in entries if p.connection == connection]
        return sorted(entries, key=lambda p: (p.connection, p.name))

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()
