"""HTTP client for communicating with the replication Controller service."""

import time
import uuid
from typing import Optional

import httpx

from common.constants import AUTOFOLLOW_PATH, FOLLOWER_FGAC_ROLE, LEADER_FGAC_ROLE
from common.logging_config import get_logger
from cli.config import Config
from cli.constants import GREEN, RESET

logger = get_logger(__name__)


class ControllerClient:
    """HTTP client for Controller API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize controller client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized ControllerClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        if isinstance(last_exception, httpx.ConnectError):
            raise ConnectionError("Cannot connect to controller server. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
            errors = error_data.get('errors') or []
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'
            errors = []

        if code == 'VALIDATION_FAILED' and errors:
            return "Request rejected:\n" + "\n".join(f"  - {error}" for error in errors)

        error_messages = {
            'MALFORMED_REQUEST': f'Malformed request: {detail}',
            'PATTERN_EXISTS': 'An auto-follow pattern with this name already exists for the connection.',
            'PATTERN_NOT_FOUND': 'No auto-follow pattern with this name exists for the connection.',
            'CORRUPT_PAYLOAD': 'Server failed to forward the request. Please try again later.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            401: 'Not authenticated',
            403: 'Access forbidden',
            404: 'Not found',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    @staticmethod
    def _build_body(
        connection: str,
        name: str,
        pattern: Optional[str] = None,
        leader_role: Optional[str] = None,
        follower_role: Optional[str] = None
    ) -> dict:
        body = {'connection': connection, 'name': name}
        if pattern is not None:
            body['pattern'] = pattern
        roles = {}
        if leader_role is not None:
            roles[LEADER_FGAC_ROLE] = leader_role
        if follower_role is not None:
            roles[FOLLOWER_FGAC_ROLE] = follower_role
        if roles:
            body['assume_roles'] = roles
        return body

    def add_pattern(
        self,
        connection: str,
        name: str,
        pattern: str,
        leader_role: Optional[str] = None,
        follower_role: Optional[str] = None
    ) -> str:
        """
        Register an auto-follow pattern.

        Returns:
            Success or error message
        """
        logger.info(f"Adding auto-follow pattern [connection={connection}] [name={name}] pattern={pattern}")
        body = self._build_body(connection, name, pattern, leader_role, follower_role)
        try:
            response = self._request_with_retry('POST', AUTOFOLLOW_PATH, json=body)

            if response.status_code == 200:
                return f"{GREEN}Added{RESET} auto-follow pattern '{name}' ({pattern}) on connection '{connection}'"
            logger.warning(f"Add pattern failed [name={name}] status={response.status_code}")
            return f"Add pattern failed: {self._format_error(response)}"

        except ConnectionError as e:
            logger.error(f"Connection error while adding pattern: {e}")
            return f"Error: {e}"

    def remove_pattern(
        self,
        connection: str,
        name: str,
        leader_role: Optional[str] = None,
        follower_role: Optional[str] = None
    ) -> str:
        """
        Remove an auto-follow pattern.

        Returns:
            Success or error message
        """
        logger.info(f"Removing auto-follow pattern [connection={connection}] [name={name}]")
        body = self._build_body(connection, name, None, leader_role, follower_role)
        try:
            response = self._request_with_retry('DELETE', AUTOFOLLOW_PATH, json=body)

            if response.status_code == 200:
                return f"{GREEN}Removed{RESET} auto-follow pattern '{name}' from connection '{connection}'"
            logger.warning(f"Remove pattern failed [name={name}] status={response.status_code}")
            return f"Remove pattern failed: {self._format_error(response)}"

        except ConnectionError as e:
            logger.error(f"Connection error while removing pattern: {e}")
            return f"Error: {e}"

    def list_patterns(self, connection: Optional[str] = None) -> str:
        """
        List registered auto-follow patterns.

        Returns:
            Formatted listing or error message
        """
        params = {'connection': connection} if connection else None
        try:
            response = self._request_with_retry('GET', AUTOFOLLOW_PATH, params=params)

            if response.status_code != 200:
                return f"List patterns failed: {self._format_error(response)}"

            patterns = response.json().get('patterns', [])
            if not patterns:
                return "No auto-follow patterns found"

            lines = [f"Found {len(patterns)} pattern(s):"]
            for p in patterns:
                roles = " [assume roles]" if p.get('has_assume_roles') else ""
                lines.append(f"  {p['connection']}/{p['name']}: {p['pattern']}{roles}")
            return "\n".join(lines)

        except ConnectionError as e:
            logger.error(f"Connection error while listing patterns: {e}")
            return f"Error: {e}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
