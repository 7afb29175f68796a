"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.exceptions import ProvisioningFailureError
from common.logging_config import get_logger
from cli.config import Config
from cli.controller_client import ControllerClient
from cli.models import (
    AddPatternCommand,
    ListPatternsCommand,
    ProvisionCommand,
    RemovePatternCommand,
)
from provisioning.security_client import SecurityApiClient
from provisioning.sequence import SecurityProvisioningSequence

logger = get_logger(__name__)


_config: Optional[Config] = None
_client: Optional[ControllerClient] = None


def get_config() -> Config:
    """
    Get or load the global CLI Config.

    Returns:
        Config instance backed by ~/.replctl/config.json
    """
    global _config
    if _config is None:
        _config = Config(Path.home() / '.replctl' / 'config.json')
    return _config


def get_client() -> ControllerClient:
    """
    Get or create global ControllerClient instance.

    Returns:
        ControllerClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new ControllerClient instance")
        _client = ControllerClient(get_config())
    return _client


def handle_add_pattern(cmd: AddPatternCommand, client: Optional[ControllerClient] = None) -> str:
    """
    Handle 'add-pattern' command.

    Args:
        cmd: AddPatternCommand with connection, name, pattern and optional roles
        client: Optional ControllerClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.add_pattern(
        cmd.connection,
        cmd.name,
        cmd.pattern,
        leader_role=cmd.leader_role,
        follower_role=cmd.follower_role,
    )


def handle_remove_pattern(cmd: RemovePatternCommand, client: Optional[ControllerClient] = None) -> str:
    """Handle 'remove-pattern' command."""
    if client is None:
        client = get_client()
    return client.remove_pattern(
        cmd.connection,
        cmd.name,
        leader_role=cmd.leader_role,
        follower_role=cmd.follower_role,
    )


def handle_list_patterns(cmd: ListPatternsCommand, client: Optional[ControllerClient] = None) -> str:
    """Handle 'list-patterns' command."""
    if client is None:
        client = get_client()
    return client.list_patterns(cmd.connection)


def build_security_clients(config: Config) -> dict:
    """
    Create one SecurityApiClient per configured cluster.

    Raises:
        ValueError: If a cluster URL or the admin password is missing
    """
    auth = config.get_admin_auth()
    if auth is None:
        raise ValueError("No admin password configured. Set REPL_ADMIN_PASSWORD or admin_password in the config file")

    urls = config.get_cluster_urls()
    for cluster, url in urls.items():
        if not url:
            raise ValueError(f"No URL configured for the {cluster} cluster")

    clients = {}
    for cluster, url in urls.items():
        clients[cluster] = SecurityApiClient(
            cluster=cluster,
            base_url=url,
            auth=auth,
            verify=config.get_verify_tls(),
            timeout=config.get_timeout(),
        )
    return clients


def handle_provision(
    cmd: ProvisionCommand,
    sequence: Optional[SecurityProvisioningSequence] = None,
    config: Optional[Config] = None
) -> str:
    """
    Handle 'provision' command.

    Args:
        cmd: ProvisionCommand
        sequence: Optional prepared sequence for dependency injection (testing)
        config: Optional Config used to build security clients

    Returns:
        Summary of created resources or the failure that stopped the run
    """
    clients = {}
    if sequence is None:
        try:
            clients = build_security_clients(config or get_config())
        except ValueError as e:
            return f"Error: {e}"
        sequence = SecurityProvisioningSequence(clients)

    logger.info("Executing provision command")
    try:
        steps = sequence.run()
    except ProvisioningFailureError as e:
        return f"Provisioning failed during {e.phase} on {e.cluster}: {e}"
    finally:
        for client in clients.values():
            client.close()

    lines = [f"Provisioning complete: {len(steps)} resource(s) created"]
    for step in steps:
        lines.append(f"  [{step.cluster}] {step.target}")
    return "\n".join(lines)
