"""Shared data type definitions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional


@dataclass(frozen=True)
class AutoFollowPattern:
    """
    A registered auto-follow rule on the follower cluster.
    """
    connection: str
    name: str
    pattern: str
    created_at: datetime
    assume_roles: Optional[Dict[str, str]] = None
