"""Tests for domain lookups and start decisions."""

import pytest
from pydantic import ValidationError

from podscope_core.domain import (
    AdminServer,
    ClusterSpec,
    DomainSpec,
    EffectiveServerSpec,
    ManagedServer,
)
from podscope_core.errors import ScopeNotFoundError
from podscope_core.models import EnvVar, ServerStartPolicy, ServerStartState


def _domain(**kwargs) -> DomainSpec:
    domain = DomainSpec(
        domain_uid="sample-domain1",
        replicas=2,
        admin_server=AdminServer(server_start_state="ADMIN"),
        clusters=[
            ClusterSpec(cluster_name="cluster-1", replicas=3),
            ClusterSpec(cluster_name="cluster-2"),
        ],
        managed_servers=[ManagedServer(server_name="ms1", server_start_policy="ALWAYS")],
        **kwargs,
    )
    domain.add_environment_variable("DOMAIN_HOME", "/u01/domains/sample")
    domain.clusters[0].add_environment_variable("CLUSTER", "1")
    return domain


def test_get_cluster_and_server():
    domain = _domain()
    assert domain.get_cluster("cluster-1").replicas == 3
    assert domain.get_cluster("missing") is None
    assert domain.get_managed_server("ms1").server_start_policy == ServerStartPolicy.ALWAYS
    assert domain.get_managed_server("ms9") is None


def test_replica_count_falls_back_to_domain_default():
    domain = _domain()
    assert domain.replica_count("cluster-1") == 3
    assert domain.replica_count("cluster-2") == 2
    assert domain.replica_count("undeclared") == 2


def test_effective_server_resolves_server_cluster_domain():
    domain = _domain()

    spec = domain.effective_server("ms1", "cluster-1")

    assert spec.configuration.server_start_policy == ServerStartPolicy.ALWAYS
    assert spec.configuration.env == [
        EnvVar(name="CLUSTER", value="1"),
        EnvVar(name="DOMAIN_HOME", value="/u01/domains/sample"),
    ]
    assert spec.cluster_replicas == 3
    assert not spec.is_admin_server


def test_undeclared_server_takes_cluster_and_domain_settings():
    domain = _domain(server_start_policy="IF_NEEDED")

    spec = domain.effective_server("ms7", "cluster-1")

    assert spec.configuration.server_name == "ms7"
    assert spec.configuration.server_start_policy == ServerStartPolicy.IF_NEEDED
    assert [e.name for e in spec.configuration.env] == ["CLUSTER", "DOMAIN_HOME"]


def test_effective_server_with_undeclared_cluster_uses_domain():
    domain = _domain()
    spec = domain.effective_server("ms2", "cluster-9")
    assert [e.name for e in spec.configuration.env] == ["DOMAIN_HOME"]
    assert spec.cluster_replicas == 2


def test_effective_server_does_not_mutate_domain():
    domain = _domain()
    before = domain.model_copy(deep=True)

    spec = domain.effective_server("ms1", "cluster-1")
    spec.configuration.add_pod_label("edited", "yes")

    assert domain == before


def test_effective_admin_server():
    domain = _domain(server_start_policy="ADMIN_ONLY")
    spec = domain.effective_admin_server()

    assert spec.is_admin_server
    assert spec.desired_state == ServerStartState.ADMIN
    assert spec.configuration.server_start_policy is None
    assert spec.should_start()


def test_effective_admin_server_when_not_declared():
    domain = DomainSpec()
    domain.add_pod_label("app", "wls")
    spec = domain.effective_admin_server()
    assert isinstance(spec.configuration, AdminServer)
    assert spec.configuration.pod_labels == {"app": "wls"}
    assert spec.desired_state == ServerStartState.RUNNING


def test_effective_cluster():
    domain = _domain(server_start_policy="ALWAYS")
    cluster = domain.effective_cluster("cluster-2")
    assert cluster.cluster_name == "cluster-2"
    assert cluster.server_start_policy == ServerStartPolicy.ALWAYS
    assert [e.name for e in cluster.env] == ["DOMAIN_HOME"]


def test_effective_cluster_not_found():
    with pytest.raises(ScopeNotFoundError):
        _domain().effective_cluster("nope")


def test_duplicate_cluster_names_are_rejected():
    with pytest.raises(ValidationError):
        DomainSpec(clusters=[ClusterSpec(cluster_name="c"), ClusterSpec(cluster_name="c")])


def test_duplicate_server_names_are_rejected():
    with pytest.raises(ValidationError):
        DomainSpec(
            managed_servers=[ManagedServer(server_name="a"), ManagedServer(server_name="a")]
        )


def test_blank_names_are_rejected():
    with pytest.raises(ValidationError):
        ManagedServer(server_name="  ")
    with pytest.raises(ValidationError):
        ClusterSpec(cluster_name="")


def test_negative_replicas_are_rejected():
    with pytest.raises(ValidationError):
        ClusterSpec(cluster_name="c", replicas=-1)


def _spec(policy=None, *, cluster="c1", admin=False, admin_only=False, replicas=2):
    return EffectiveServerSpec(
        configuration=ManagedServer(server_name="ms", server_start_policy=policy),
        cluster_name=cluster,
        is_admin_server=admin,
        domain_admin_only=admin_only,
        cluster_replicas=replicas,
    )


@pytest.mark.parametrize(
    "spec, current_replicas, expected",
    [
        (_spec("NEVER"), 0, False),
        (_spec("ALWAYS"), 5, True),
        (_spec("IF_NEEDED"), 1, True),
        (_spec("IF_NEEDED"), 2, False),
        (_spec(None), 1, True),
        (_spec(None), 2, False),
        (_spec(None, cluster=None), 10, True),
        (_spec("ALWAYS", admin_only=True), 0, False),
        (_spec("ADMIN_ONLY"), 0, False),
        (_spec(None, admin=True, admin_only=True, cluster=None), 0, True),
        (_spec("NEVER", admin=True, cluster=None), 0, False),
    ],
)
def test_should_start(spec, current_replicas, expected):
    assert spec.should_start(current_replicas) is expected


def test_managed_server_in_admin_only_domain_does_not_start():
    domain = _domain(server_start_policy="ADMIN_ONLY")
    spec = domain.effective_server("ms1", "cluster-1")
    assert spec.domain_admin_only
    assert not spec.should_start()


def test_never_server_stays_stopped_when_no_broader_scope_sets_a_policy():
    domain = _domain()
    domain.managed_servers.append(ManagedServer(server_name="ms2", server_start_policy="NEVER"))

    spec = domain.effective_server("ms2", "cluster-2")

    assert spec.configuration.server_start_policy == ServerStartPolicy.NEVER
    assert not spec.should_start(current_replicas=0)
