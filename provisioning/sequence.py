"""
Ordered security setup for a leader/follower cluster pair.

Phases run strictly one after another because each one references what the
previous ones created:

1. create principals on every cluster
2. create follower roles
3. create leader roles
4. bind principals to roles

Every call must answer 201 Created. The first call that does not aborts the
run with ProvisioningFailureError; nothing is retried or rolled back.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import httpx

from common.constants import FOLLOWER, LEADER
from common.exceptions import ProvisioningFailureError
from common.logging_config import get_logger
from provisioning.plan import ProvisioningPlan, default_plan
from provisioning.security_client import SecurityApiClient

logger = get_logger(__name__)

CREATE_PRINCIPALS = "create_principals"
CREATE_FOLLOWER_ROLES = "create_follower_roles"
CREATE_LEADER_ROLES = "create_leader_roles"
BIND_ROLES = "bind_roles"

PHASES = (CREATE_PRINCIPALS, CREATE_FOLLOWER_ROLES, CREATE_LEADER_ROLES, BIND_ROLES)


@dataclass(frozen=True)
class ProvisioningStep:
    """One successful call of a provisioning run."""
    phase: str
    cluster: str
    target: str
    status_code: int


class SecurityProvisioningSequence:
    """Applies a ProvisioningPlan to a set of clusters, one call at a time."""

    def __init__(
        self,
        clients: Dict[str, SecurityApiClient],
        plan: Optional[ProvisioningPlan] = None
    ):
        """
        Args:
            clients: Security API client per cluster name
            plan: What to create; the default replication plan when omitted

        Raises:
            ValueError: If the plan targets a cluster with no client,
                or a role on a cluster other than the leader or follower
        """
        self.clients = clients
        self.plan = plan if plan is not None else default_plan()

        unplaced = sorted({r.role_name for r in self.plan.roles if r.cluster not in (FOLLOWER, LEADER)})
        if unplaced:
            raise ValueError(f"Roles must target the {FOLLOWER} or {LEADER} cluster: {', '.join(unplaced)}")

        referenced = (
            {p.cluster for p in self.plan.principals}
            | {r.cluster for r in self.plan.roles}
            | {b.cluster for b in self.plan.bindings}
        )
        missing = sorted(referenced - set(clients))
        if missing:
            raise ValueError(f"No security client configured for cluster(s): {', '.join(missing)}")

    def run(self) -> List[ProvisioningStep]:
        """
        Execute every phase in order.

        Returns:
            The completed steps, in execution order

        Raises:
            ProvisioningFailureError: On the first call that is not 201 Created
        """
        steps: List[ProvisioningStep] = []
        logger.info(
            f"Provisioning started: {len(self.plan.principals)} principal(s), "
            f"{len(self.plan.roles)} role(s), {len(self.plan.bindings)} binding(s)"
        )

        for principal in self.plan.principals:
            steps.append(self._call(
                CREATE_PRINCIPALS,
                principal.cluster,
                f"internalusers/{principal.username}",
                lambda client: client.put_internal_user(principal.username, principal.password)
            ))

        for phase, cluster in ((CREATE_FOLLOWER_ROLES, FOLLOWER), (CREATE_LEADER_ROLES, LEADER)):
            for role in self.plan.roles_for(cluster):
                steps.append(self._call(
                    phase,
                    role.cluster,
                    f"roles/{role.role_name}",
                    lambda client: client.put_role(role.role_name, role.to_body())
                ))

        for binding in self.plan.bindings:
            steps.append(self._call(
                BIND_ROLES,
                binding.cluster,
                f"rolesmapping/{binding.role_name}",
                lambda client: client.put_role_mapping(binding.role_name, binding.users)
            ))

        logger.info(f"Provisioning completed: {len(steps)} call(s) succeeded")
        return steps

    def _call(
        self,
        phase: str,
        cluster: str,
        target: str,
        request: Callable[[SecurityApiClient], httpx.Response]
    ) -> ProvisioningStep:
        client = self.clients[cluster]
        try:
            response = request(client)
        except httpx.HTTPError as e:
            logger.error(f"Provisioning {phase} failed: {target} error={e} [cluster={cluster}]")
            raise ProvisioningFailureError(
                f"{phase}: {target} on {cluster} failed: {e}",
                phase=phase,
                cluster=cluster
            ) from e

        if response.status_code != httpx.codes.CREATED:
            logger.error(
                f"Provisioning {phase} failed: {target} status={response.status_code} "
                f"body={response.text} [cluster={cluster}]"
            )
            raise ProvisioningFailureError(
                f"{phase}: {target} on {cluster} returned {response.status_code}, expected 201",
                phase=phase,
                cluster=cluster,
                status_code=response.status_code
            )

        logger.info(f"Provisioning {phase}: {target} created [cluster={cluster}]")
        return ProvisioningStep(
            phase=phase,
            cluster=cluster,
            target=target,
            status_code=response.status_code
        )
