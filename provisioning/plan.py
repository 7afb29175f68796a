"""
Principals, roles and bindings that replication needs on each cluster.

The plan is plain data; `provisioning.sequence` decides the order in which
it is applied.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from common.constants import (
    AUTOFOLLOW_UPDATE_ACTION,
    CHANGES_READ_ACTION,
    CHANGES_WRITE_ACTION,
    FILE_CHUNK_READ_ACTION,
    FOLLOWER,
    INDEX_PAUSE_ACTION,
    INDEX_RESUME_ACTION,
    INDEX_START_ACTION,
    INDEX_STATUS_CHECK_ACTION,
    INDEX_STOP_ACTION,
    INDEX_UPDATE_ACTION,
    LEADER,
    SETUP_VALIDATE_ACTION,
)
from provisioning.config import DEFAULT_PRINCIPAL_PASSWORD

FOLLOWER_CLUSTER_PERMISSIONS: Tuple[str, ...] = (
    AUTOFOLLOW_UPDATE_ACTION,
)

FOLLOWER_INDEX_ACTIONS: Tuple[str, ...] = (
    SETUP_VALIDATE_ACTION,
    CHANGES_WRITE_ACTION,
    INDEX_START_ACTION,
    INDEX_PAUSE_ACTION,
    INDEX_RESUME_ACTION,
    INDEX_STOP_ACTION,
    INDEX_UPDATE_ACTION,
    INDEX_STATUS_CHECK_ACTION,
)

LEADER_INDEX_ACTIONS: Tuple[str, ...] = (
    SETUP_VALIDATE_ACTION,
    CHANGES_READ_ACTION,
    FILE_CHUNK_READ_ACTION,
)


@dataclass(frozen=True)
class IndexPermission:
    """Actions allowed on indices matching any of `index_patterns`."""
    index_patterns: Tuple[str, ...]
    allowed_actions: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            'index_patterns': list(self.index_patterns),
            'allowed_actions': list(self.allowed_actions)
        }


@dataclass(frozen=True)
class PrincipalSpec:
    """An internal user to create on one cluster."""
    cluster: str
    username: str
    password: str


@dataclass(frozen=True)
class RoleSpec:
    """A role to create on one cluster."""
    cluster: str
    role_name: str
    index_permissions: Tuple[IndexPermission, ...]
    cluster_permissions: Tuple[str, ...] = ()

    def to_body(self) -> Dict:
        body = {}
        if self.cluster_permissions:
            body['cluster_permissions'] = list(self.cluster_permissions)
        body['index_permissions'] = [p.to_dict() for p in self.index_permissions]
        return body


@dataclass(frozen=True)
class RoleBinding:
    """Users mapped to a role on one cluster."""
    cluster: str
    role_name: str
    users: Tuple[str, ...]


@dataclass(frozen=True)
class ProvisioningPlan:
    principals: Tuple[PrincipalSpec, ...] = ()
    roles: Tuple[RoleSpec, ...] = ()
    bindings: Tuple[RoleBinding, ...] = ()

    def roles_for(self, cluster: str) -> List[RoleSpec]:
        return [role for role in self.roles if role.cluster == cluster]


def follower_role(role_name: str, index_prefix: str) -> RoleSpec:
    """
    Role for running replication on the follower, limited to indices
    starting with `index_prefix`.
    """
    return RoleSpec(
        cluster=FOLLOWER,
        role_name=role_name,
        cluster_permissions=FOLLOWER_CLUSTER_PERMISSIONS,
        index_permissions=(
            IndexPermission(
                index_patterns=(f"{index_prefix}*",),
                allowed_actions=FOLLOWER_INDEX_ACTIONS
            ),
        ),
    )


def leader_role(role_name: str, index_pattern: str) -> RoleSpec:
    """Read-side role on the leader: validate, read changes, fetch file chunks."""
    return RoleSpec(
        cluster=LEADER,
        role_name=role_name,
        index_permissions=(
            IndexPermission(
                index_patterns=(index_pattern,),
                allowed_actions=LEADER_INDEX_ACTIONS
            ),
        ),
    )


def default_plan(password: str = DEFAULT_PRINCIPAL_PASSWORD) -> ProvisioningPlan:
    """
    Two users on both clusters, split across two follower roles.

    TestUser1 holds Role1 on both sides and can replicate FollowerIndex1*.
    TestUser2 holds Role2 on the follower only, over FollowerIndex2*.
    """
    principals = tuple(
        PrincipalSpec(cluster=cluster, username=username, password=password)
        for username in ("TestUser1", "TestUser2")
        for cluster in (FOLLOWER, LEADER)
    )
    roles = (
        follower_role("Role1", "FollowerIndex1"),
        follower_role("Role2", "FollowerIndex2"),
        leader_role("Role1", "*"),
    )
    bindings = (
        RoleBinding(cluster=FOLLOWER, role_name="Role1", users=("TestUser1",)),
        RoleBinding(cluster=FOLLOWER, role_name="Role2", users=("TestUser2",)),
        RoleBinding(cluster=LEADER, role_name="Role1", users=("TestUser1",)),
    )
    return ProvisioningPlan(principals=principals, roles=roles, bindings=bindings)
