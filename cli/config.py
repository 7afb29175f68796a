"""Configuration management for the replication admin CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from common.constants import FOLLOWER, LEADER


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "controller_host": os.environ.get("REPL_CONTROLLER_HOST", "localhost"),
        "controller_port": int(os.environ.get("REPL_CONTROLLER_PORT", "9200")),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "leader_url": os.environ.get("REPL_LEADER_URL", "https://localhost:9201"),
        "follower_url": os.environ.get("REPL_FOLLOWER_URL", "https://localhost:9202"),
        "admin_username": os.environ.get("REPL_ADMIN_USERNAME", "admin"),
        "verify_tls": True,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.replctl/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.replctl' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except OSError:
                pass
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError:
                pass
            return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        config.update(data)
        return config

    def get_base_url(self) -> str:
        """
        Get controller base URL.

        Returns:
            Base URL string (e.g., "http://localhost:9200")
        """
        host = self.data.get('controller_host', 'localhost')
        port = self.data.get('controller_port', 9200)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def get_cluster_urls(self) -> dict:
        """
        Get security API endpoints per cluster.

        Returns:
            Dictionary keyed by 'leader' and 'follower'
        """
        return {
            LEADER: self.data.get('leader_url'),
            FOLLOWER: self.data.get('follower_url'),
        }

    def get_admin_auth(self) -> Optional[tuple]:
        """
        Get security admin credentials.

        The password is read from REPL_ADMIN_PASSWORD when set, else from the
        config file. Returns None when no password is available.
        """
        password = os.environ.get('REPL_ADMIN_PASSWORD') or self.data.get('admin_password')
        if not password:
            return None
        return (self.data.get('admin_username', 'admin'), password)

    def get_verify_tls(self) -> bool:
        return bool(self.data.get('verify_tls', True))
