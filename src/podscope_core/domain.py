"""Domain hierarchy: domain, clusters, admin server and managed servers.

Each level is a ``BaseConfiguration``. The effective settings of a server are the
server's own settings, completed from its cluster (if any) and then the domain.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field, field_validator

from .configuration import BaseConfiguration
from .errors import ScopeNotFoundError
from .models import ServerStartPolicy, ServerStartState
from .resolution import resolve_effective

logger = logging.getLogger(__name__)


def _non_blank(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} cannot be empty")
    return value.strip()


class ManagedServer(BaseConfiguration):
    """Settings for one managed server."""

    server_name: str = Field(..., description="Name of the server")

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v):
        return _non_blank(v, "Server name")


class AdminServer(BaseConfiguration):
    """Settings for the domain's admin server."""


class ClusterSpec(BaseConfiguration):
    """Settings shared by the servers of one cluster."""

    cluster_name: str = Field(..., description="Name of the cluster")
    replicas: Optional[int] = Field(
        None, ge=0, description="Number of servers to run; the domain default applies when unset"
    )

    @field_validator("cluster_name")
    @classmethod
    def validate_cluster_name(cls, v):
        return _non_blank(v, "Cluster name")


class DomainSpec(BaseConfiguration):
    """Domain-wide settings plus the declared clusters and servers."""

    domain_uid: Optional[str] = Field(None, description="Unique identifier of the domain")
    replicas: int = Field(0, ge=0, description="Default replica count for clusters")
    admin_server: Optional[AdminServer] = None
    clusters: List[ClusterSpec] = Field(default_factory=list)
    managed_servers: List[ManagedServer] = Field(default_factory=list)

    @field_validator("clusters")
    @classmethod
    def validate_clusters(cls, v):
        names = [cluster.cluster_name for cluster in v]
        if len(names) != len(set(names)):
            raise ValueError("Cluster names must be unique")
        return v

    @field_validator("managed_servers")
    @classmethod
    def validate_managed_servers(cls, v):
        names = [server.server_name for server in v]
        if len(names) != len(set(names)):
            raise ValueError("Managed server names must be unique")
        return v

    def get_cluster(self, cluster_name: str) -> Optional[ClusterSpec]:
        """Get cluster definition by name."""
        for cluster in self.clusters:
            if cluster.cluster_name == cluster_name:
                return cluster
        return None

    def get_managed_server(self, server_name: str) -> Optional[ManagedServer]:
        """Get managed server definition by name."""
        for server in self.managed_servers:
            if server.server_name == server_name:
                return server
        return None

    def replica_count(self, cluster_name: str) -> int:
        """Replicas declared by the cluster, or the domain default."""
        cluster = self.get_cluster(cluster_name)
        if cluster is not None and cluster.replicas is not None:
            return cluster.replicas
        return self.replicas

    def effective_cluster(self, cluster_name: str) -> ClusterSpec:
        """Cluster settings completed from the domain.

        Raises:
            ScopeNotFoundError: If the cluster is not declared
        """
        cluster = self.get_cluster(cluster_name)
        if cluster is None:
            raise ScopeNotFoundError("Cluster", cluster_name)
        return resolve_effective([cluster, self])

    def effective_server(
        self, server_name: str, cluster_name: Optional[str] = None
    ) -> "EffectiveServerSpec":
        """Resolve a managed server against its cluster and the domain.

        Servers and clusters without a declaration contribute nothing of their own.
        """
        server = self.get_managed_server(server_name)
        if server is None:
            server = ManagedServer(server_name=server_name)
        cluster = self.get_cluster(cluster_name) if cluster_name else None
        if cluster_name and cluster is None:
            logger.debug("Cluster %s is not declared; resolving %s against the domain", cluster_name, server_name)

        configuration = resolve_effective([server, cluster, self])
        return EffectiveServerSpec(
            configuration=configuration,
            cluster_name=cluster_name,
            is_admin_server=False,
            domain_admin_only=self.is_start_admin_server_only(),
            cluster_replicas=self.replica_count(cluster_name) if cluster_name else 0,
        )

    def effective_admin_server(self) -> "EffectiveServerSpec":
        """Resolve the admin server against the domain."""
        admin_server = self.admin_server if self.admin_server is not None else AdminServer()
        configuration = resolve_effective([admin_server, self])
        return EffectiveServerSpec(
            configuration=configuration,
            cluster_name=None,
            is_admin_server=True,
            domain_admin_only=self.is_start_admin_server_only(),
            cluster_replicas=0,
        )


@dataclass
class EffectiveServerSpec:
    """Resolved settings of one server together with the facts needed to start it."""

    configuration: BaseConfiguration
    cluster_name: Optional[str]
    is_admin_server: bool
    domain_admin_only: bool
    cluster_replicas: int

    @property
    def desired_state(self) -> ServerStartState:
        return self.configuration.server_start_state or ServerStartState.RUNNING

    def should_start(self, current_replicas: int = 0) -> bool:
        """
        Decide whether the server should be running.

        Args:
            current_replicas: servers of the same cluster already started

        Returns:
            True if the server should be started
        """
        policy = self.configuration.server_start_policy
        if policy == ServerStartPolicy.NEVER:
            return False
        if self.is_admin_server:
            return True
        if self.domain_admin_only or policy == ServerStartPolicy.ADMIN_ONLY:
            return False
        if policy == ServerStartPolicy.ALWAYS:
            return True
        if self.cluster_name is None:
            return True
        return current_replicas < self.cluster_replicas
