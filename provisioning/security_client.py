"""HTTP client for one cluster's security REST API."""

from typing import Dict, Iterable, Optional, Tuple

import httpx

from common.logging_config import get_logger
from provisioning.config import SECURITY_API_PREFIX, SECURITY_REQUEST_TIMEOUT

logger = get_logger(__name__)


class SecurityApiClient:
    """
    Issues user, role and role-mapping PUTs against a single cluster.

    Every call is made exactly once; callers decide what a non-201 means.
    """

    def __init__(
        self,
        cluster: str,
        base_url: str,
        auth: Optional[Tuple[str, str]] = None,
        verify: bool = True,
        timeout: float = SECURITY_REQUEST_TIMEOUT,
        api_prefix: str = SECURITY_API_PREFIX
    ):
        """
        Initialize security API client.

        Args:
            cluster: Logical cluster name ('leader' or 'follower'), used in logs
            base_url: Cluster REST endpoint, e.g. "https://localhost:9200"
            auth: Admin (username, password) for basic auth
            verify: Verify the cluster's TLS certificate
            timeout: Request timeout in seconds
            api_prefix: Path of the security plugin's REST API
        """
        self.cluster = cluster
        self.api_prefix = api_prefix.strip('/')
        self.session = httpx.Client(
            base_url=base_url,
            auth=auth,
            verify=verify,
            timeout=timeout
        )
        logger.info(f"Initialized SecurityApiClient [cluster={cluster}] [base_url={base_url}]")

    def _put(self, path: str, body: Dict) -> httpx.Response:
        endpoint = f"/{self.api_prefix}/{path}"
        response = self.session.put(endpoint, json=body)
        logger.debug(
            f"PUT {endpoint} status={response.status_code} [cluster={self.cluster}]"
        )
        return response

    def put_internal_user(self, username: str, password: str) -> httpx.Response:
        return self._put(f"internalusers/{username}", {'password': password})

    def put_role(self, role_name: str, body: Dict) -> httpx.Response:
        return self._put(f"roles/{role_name}", body)

    def put_role_mapping(self, role_name: str, users: Iterable[str]) -> httpx.Response:
        return self._put(f"rolesmapping/{role_name}", {'users': list(users)})

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
