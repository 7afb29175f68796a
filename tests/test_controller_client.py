"""Unit tests for ControllerClient."""

import json

import httpx
import pytest

from common.constants import AUTOFOLLOW_PATH
from cli.controller_client import ControllerClient


def make_client(config, handler):
    client = ControllerClient(config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    return client


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr('cli.controller_client.time.sleep', lambda seconds: None)


@pytest.fixture
def recorded():
    return []


@pytest.fixture
def client_with_mock(temp_config, recorded):
    """ControllerClient whose controller accepts everything."""
    def handler(request):
        body = json.loads(request.content) if request.content else None
        recorded.append((request.method, request.url.path, body))
        if request.method == 'GET':
            return httpx.Response(200, json={'patterns': [
                {
                    'connection': 'leader1',
                    'name': 'logs',
                    'pattern': 'logs-*',
                    'created_at': '2024-01-01T00:00:00+00:00',
                    'has_assume_roles': True
                }
            ]})
        return httpx.Response(200, json={'acknowledged': True})

    return make_client(temp_config, handler)


def test_add_pattern_success(client_with_mock, recorded):
    result = client_with_mock.add_pattern('leader1', 'logs', 'logs-*', leader_role='L', follower_role='F')

    assert 'Added' in result
    assert recorded == [('POST', AUTOFOLLOW_PATH, {
        'connection': 'leader1',
        'name': 'logs',
        'pattern': 'logs-*',
        'assume_roles': {'leader_fgac_role': 'L', 'follower_fgac_role': 'F'}
    })]


def test_remove_pattern_sends_no_pattern(client_with_mock, recorded):
    result = client_with_mock.remove_pattern('leader1', 'logs')

    assert 'Removed' in result
    assert recorded == [('DELETE', AUTOFOLLOW_PATH, {'connection': 'leader1', 'name': 'logs'})]


def test_partial_roles_are_sent_as_given(client_with_mock, recorded):
    client_with_mock.add_pattern('leader1', 'logs', 'logs-*', leader_role='L')

    assert recorded[0][2]['assume_roles'] == {'leader_fgac_role': 'L'}


def test_list_patterns(client_with_mock):
    result = client_with_mock.list_patterns()

    assert 'Found 1 pattern(s)' in result
    assert 'leader1/logs: logs-* [assume roles]' in result


def test_list_patterns_empty(temp_config):
    client = make_client(temp_config, lambda request: httpx.Response(200, json={'patterns': []}))

    assert client.list_patterns() == "No auto-follow patterns found"


def test_validation_errors_are_listed(temp_config):
    def handler(request):
        return httpx.Response(400, json={
            'detail': 'Validation Failed',
            'code': 'VALIDATION_FAILED',
            'errors': ['Missing pattern', 'Need roles for leader_fgac_role and follower_fgac_role']
        })

    result = make_client(temp_config, handler).add_pattern('leader1', 'logs', 'logs-*')

    assert 'Request rejected' in result
    assert '- Missing pattern' in result
    assert '- Need roles for leader_fgac_role and follower_fgac_role' in result


def test_pattern_not_found_message(temp_config):
    def handler(request):
        return httpx.Response(404, json={'detail': 'missing', 'code': 'PATTERN_NOT_FOUND'})

    result = make_client(temp_config, handler).remove_pattern('leader1', 'logs')

    assert 'No auto-follow pattern with this name exists' in result


def test_retry_on_server_error(temp_config, no_sleep):
    call_count = 0

    def failing_handler(request):
        nonlocal call_count
        call_count += 1
        if call_count < 3:
            return httpx.Response(500, json={'detail': 'Server error', 'code': 'INTERNAL_ERROR'})
        return httpx.Response(200, json={'patterns': []})

    temp_config.data['max_retries'] = 3

    make_client(temp_config, failing_handler).list_patterns()

    assert call_count == 3


def test_no_retry_on_client_error(temp_config, no_sleep):
    call_count = 0

    def error_handler(request):
        nonlocal call_count
        call_count += 1
        return httpx.Response(400, json={'detail': 'exists', 'code': 'PATTERN_EXISTS'})

    result = make_client(temp_config, error_handler).add_pattern('leader1', 'logs', 'logs-*')

    assert call_count == 1
    assert 'already exists' in result


def test_connection_error_handling(temp_config, no_sleep):
    def failing_handler(request):
        raise httpx.ConnectError("Connection refused")

    temp_config.data['max_retries'] = 1

    result = make_client(temp_config, failing_handler).add_pattern('leader1', 'logs', 'logs-*')

    assert 'Cannot connect to controller server' in result


def test_close_session(client_with_mock):
    client_with_mock.close()
    assert client_with_mock.session.is_closed
