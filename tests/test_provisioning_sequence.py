"""Tests for SecurityProvisioningSequence against mocked security APIs."""

import json

import httpx
import pytest

from common.constants import FOLLOWER, LEADER
from common.exceptions import ProvisioningFailureError
from provisioning.plan import (
    IndexPermission,
    PrincipalSpec,
    ProvisioningPlan,
    RoleBinding,
    RoleSpec,
    default_plan,
)
from provisioning.security_client import SecurityApiClient
from provisioning.sequence import (
    BIND_ROLES,
    CREATE_FOLLOWER_ROLES,
    CREATE_LEADER_ROLES,
    CREATE_PRINCIPALS,
    SecurityProvisioningSequence,
)

PREFIX = '/_opendistro/_security/api'


class RecordingCluster:
    """Fake security API that records calls and answers 201 unless told otherwise."""

    def __init__(self, name, calls, failures=None, errors=None):
        self.name = name
        self.calls = calls
        self.failures = failures or {}
        self.errors = errors or set()

    def handler(self, request):
        path = request.url.path
        self.calls.append((self.name, request.method, path, json.loads(request.content)))
        if path in self.errors:
            raise httpx.ConnectError("Connection refused")
        return httpx.Response(self.failures.get(path, 201), json={'status': 'CREATED'})

    def client(self):
        client = SecurityApiClient(cluster=self.name, base_url=f'http://{self.name}')
        client.session = httpx.Client(
            transport=httpx.MockTransport(self.handler),
            base_url=f'http://{self.name}'
        )
        return client


@pytest.fixture
def calls():
    return []


def make_sequence(calls, follower_failures=None, leader_failures=None, follower_errors=None):
    clients = {
        FOLLOWER: RecordingCluster(FOLLOWER, calls, follower_failures, follower_errors).client(),
        LEADER: RecordingCluster(LEADER, calls, leader_failures).client(),
    }
    return SecurityProvisioningSequence(clients, default_plan(password='password'))


def test_full_sequence_runs_in_order(calls):
    steps = make_sequence(calls).run()

    assert [(cluster, path) for cluster, _, path, _ in calls] == [
        (FOLLOWER, f'{PREFIX}/internalusers/TestUser1'),
        (LEADER, f'{PREFIX}/internalusers/TestUser1'),
        (FOLLOWER, f'{PREFIX}/internalusers/TestUser2'),
        (LEADER, f'{PREFIX}/internalusers/TestUser2'),
        (FOLLOWER, f'{PREFIX}/roles/Role1'),
        (FOLLOWER, f'{PREFIX}/roles/Role2'),
        (LEADER, f'{PREFIX}/roles/Role1'),
        (FOLLOWER, f'{PREFIX}/rolesmapping/Role1'),
        (FOLLOWER, f'{PREFIX}/rolesmapping/Role2'),
        (LEADER, f'{PREFIX}/rolesmapping/Role1'),
    ]
    assert all(method == 'PUT' for _, method, _, _ in calls)
    assert [step.phase for step in steps] == (
        [CREATE_PRINCIPALS] * 4
        + [CREATE_FOLLOWER_ROLES] * 2
        + [CREATE_LEADER_ROLES]
        + [BIND_ROLES] * 3
    )


def test_request_bodies(calls):
    make_sequence(calls).run()
    bodies = {(cluster, path): body for cluster, _, path, body in calls}

    assert bodies[(LEADER, f'{PREFIX}/internalusers/TestUser2')] == {'password': 'password'}
    assert bodies[(FOLLOWER, f'{PREFIX}/rolesmapping/Role2')] == {'users': ['TestUser2']}

    follower_role = bodies[(FOLLOWER, f'{PREFIX}/roles/Role2')]
    assert follower_role['cluster_permissions'] == [
        'cluster:admin/plugins/replication/autofollow/update'
    ]
    assert follower_role['index_permissions'][0]['index_patterns'] == ['FollowerIndex2*']

    leader_role = bodies[(LEADER, f'{PREFIX}/roles/Role1')]
    assert 'cluster_permissions' not in leader_role
    assert leader_role['index_permissions'][0]['index_patterns'] == ['*']


def test_second_role_failure_aborts_before_bindings(calls):
    sequence = make_sequence(calls, follower_failures={f'{PREFIX}/roles/Role2': 500})

    with pytest.raises(ProvisioningFailureError) as exc_info:
        sequence.run()

    assert exc_info.value.phase == CREATE_FOLLOWER_ROLES
    assert exc_info.value.cluster == FOLLOWER
    assert exc_info.value.status_code == 500
    assert calls[-1][2] == f'{PREFIX}/roles/Role2'
    assert not any('rolesmapping' in path for _, _, path, _ in calls)
    assert len(calls) == 6


def test_ok_instead_of_created_is_a_failure(calls):
    """An existing user answers 200, which is not a fresh setup."""
    sequence = make_sequence(calls, follower_failures={f'{PREFIX}/internalusers/TestUser1': 200})

    with pytest.raises(ProvisioningFailureError) as exc_info:
        sequence.run()

    assert exc_info.value.phase == CREATE_PRINCIPALS
    assert exc_info.value.status_code == 200
    assert len(calls) == 1


def test_leader_binding_failure(calls):
    sequence = make_sequence(calls, leader_failures={f'{PREFIX}/rolesmapping/Role1': 403})

    with pytest.raises(ProvisioningFailureError) as exc_info:
        sequence.run()

    assert exc_info.value.phase == BIND_ROLES
    assert exc_info.value.cluster == LEADER
    assert len(calls) == 10


def test_transport_error_is_a_failure(calls):
    sequence = make_sequence(calls, follower_errors={f'{PREFIX}/roles/Role1'})

    with pytest.raises(ProvisioningFailureError) as exc_info:
        sequence.run()

    assert exc_info.value.phase == CREATE_FOLLOWER_ROLES
    assert exc_info.value.status_code is None
    assert len(calls) == 5


def test_plan_cluster_without_client(calls):
    plan = ProvisioningPlan(principals=(PrincipalSpec(cluster='other', username='u', password='p'),))

    with pytest.raises(ValueError):
        SecurityProvisioningSequence({FOLLOWER: RecordingCluster(FOLLOWER, calls).client()}, plan)


def test_role_on_unknown_cluster_is_rejected(calls):
    plan = ProvisioningPlan(
        roles=(RoleSpec(cluster='dr', role_name='R', index_permissions=(IndexPermission(('*',), ('read',)),)),),
        bindings=(RoleBinding(cluster='dr', role_name='R', users=('TestUser1',)),),
    )

    with pytest.raises(ValueError, match='must target the follower or leader cluster: R'):
        SecurityProvisioningSequence({'dr': RecordingCluster('dr', calls).client()}, plan)

    assert calls == []


def test_security_client_sends_basic_auth():
    seen = []

    def handler(request):
        seen.append(request.headers.get('Authorization'))
        return httpx.Response(201)

    client = SecurityApiClient(cluster=LEADER, base_url='http://leader', auth=('admin', 'admin'))
    client.session = httpx.Client(
        transport=httpx.MockTransport(handler),
        base_url='http://leader',
        auth=('admin', 'admin')
    )

    response = client.put_role_mapping('Role1', ['TestUser1'])

    assert response.status_code == 201
    assert seen == ['Basic YWRtaW46YWRtaW4=']
    client.close()
    assert client.session.is_closed
