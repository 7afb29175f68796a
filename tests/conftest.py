"""Shared pytest fixtures for all tests."""

import pytest

from cli.config import Config
from controller.models.autofollow_request import Action, UpdateAutoFollowPatternRequest


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .replctl directory
    """
    config_dir = tmp_path / '.replctl'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def add_request():
    """A valid ADD request without role delegation."""
    return UpdateAutoFollowPatternRequest(
        connection='leader1',
        pattern_name='p1',
        pattern='logs-*',
        action=Action.ADD,
    )


@pytest.fixture
def fgac_roles():
    """A complete role delegation pair."""
    return {'leader_fgac_role': 'L', 'follower_fgac_role': 'F'}
