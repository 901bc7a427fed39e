"""Configuration shared by every scope: domain, cluster, admin server and managed server."""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigValidationError
from .models import (
    ContainerSecurityContext,
    EnvVar,
    PodSecurityContext,
    ProbeTuning,
    ResourceRequirements,
    ServerStartPolicy,
    ServerStartState,
    Volume,
    VolumeMount,
)
from .pod import ServerPod

logger = logging.getLogger(__name__)

_C = TypeVar("_C", bound="BaseConfiguration")


def should_override_start_policy(
    policy: Optional[ServerStartPolicy],
    fallback_policy: Optional[ServerStartPolicy],
) -> bool:
    """Return True when a scope's start policy is replaced by its fallback's.

    ADMIN_ONLY in the fallback never propagates. Otherwise an unset policy takes the
    fallback's policy, and an explicit NEVER yields to any policy the fallback sets.
    """
    if fallback_policy == ServerStartPolicy.ADMIN_ONLY:
        return False
    if policy is None:
        return True
    return policy == ServerStartPolicy.NEVER and fallback_policy is not None


class BaseConfiguration(BaseModel):
    """Settings that may be declared at any level of the domain hierarchy.

    Concrete scopes subclass this; the more specific scope is completed from the
    broader one with ``fill_in_from``.
    """

    server_start_policy: Optional[ServerStartPolicy] = Field(
        None,
        description="The strategy for deciding whether to start a server. "
        "Legal values are ADMIN_ONLY, NEVER, ALWAYS, or IF_NEEDED.",
    )
    server_start_state: Optional[ServerStartState] = Field(
        None,
        description="The state in which the server is to be started. "
        "Use ADMIN if server should start in admin state. Defaults to RUNNING.",
    )
    server_pod: ServerPod = Field(
        default_factory=ServerPod, description="Configuration affecting the server pod"
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @classmethod
    def from_dict(cls: Type[_C], data: Dict[str, Any]) -> _C:
        """Build a scope from authored values, reporting every invalid field."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigValidationError(errors) from e

    def fill_in_from(self, other: Optional["BaseConfiguration"]) -> None:
        """Fill in any undefined settings in this configuration from ``other``.

        Args:
            other: the broader-scope configuration; it is only read
        """
        if other is None:
            return

        if self.server_start_state is None:
            self.server_start_state = other.server_start_state
        if should_override_start_policy(self.server_start_policy, other.server_start_policy):
            logger.debug(
                "start policy %s replaced by %s from %s",
                self.server_start_policy,
                other.server_start_policy,
                type(other).__name__,
            )
            self.server_start_policy = other.server_start_policy

        self.server_pod.fill_in_from(other.server_pod)

    def is_start_admin_server_only(self) -> bool:
        return self.server_start_policy == ServerStartPolicy.ADMIN_ONLY

    def is_start_never(self) -> bool:
        return self.server_start_policy == ServerStartPolicy.NEVER

    # Pod accessors

    @property
    def env(self) -> List[EnvVar]:
        return self.server_pod.env

    def set_env(self, env: Optional[List[EnvVar]]) -> None:
        self.server_pod.env = list(env or [])

    def add_environment_variable(self, name: str, value: Optional[str]) -> None:
        self.server_pod.add_env_var(name, value)

    @property
    def liveness_probe(self) -> Optional[ProbeTuning]:
        return self.server_pod.liveness_probe

    def set_liveness_probe(
        self, initial_delay: Optional[int], timeout: Optional[int], period: Optional[int]
    ) -> None:
        self.server_pod.set_liveness_probe(initial_delay, timeout, period)

    @property
    def readiness_probe(self) -> Optional[ProbeTuning]:
        return self.server_pod.readiness_probe

    def set_readiness_probe(
        self, initial_delay: Optional[int], timeout: Optional[int], period: Optional[int]
    ) -> None:
        self.server_pod.set_readiness_probe(initial_delay, timeout, period)

    @property
    def node_selector(self) -> Dict[str, str]:
        return self.server_pod.node_selector

    def add_node_selector(self, label_key: str, label_value: str) -> None:
        self.server_pod.add_node_selector(label_key, label_value)

    @property
    def resources(self) -> ResourceRequirements:
        return self.server_pod.resources

    def add_request_requirement(self, resource: str, quantity: str) -> None:
        self.server_pod.add_request_requirement(resource, quantity)

    def add_limit_requirement(self, resource: str, quantity: str) -> None:
        self.server_pod.add_limit_requirement(resource, quantity)

    @property
    def pod_security_context(self) -> Optional[PodSecurityContext]:
        return self.server_pod.pod_security_context

    def set_pod_security_context(self, context: Optional[PodSecurityContext]) -> None:
        self.server_pod.pod_security_context = context

    @property
    def container_security_context(self) -> Optional[ContainerSecurityContext]:
        return self.server_pod.container_security_context

    def set_container_security_context(self, context: Optional[ContainerSecurityContext]) -> None:
        self.server_pod.container_security_context = context

    @property
    def additional_volumes(self) -> List[Volume]:
        return self.server_pod.additional_volumes

    def add_additional_volume(self, name: str, path: str) -> None:
        self.server_pod.add_additional_volume(name, path)

    @property
    def additional_volume_mounts(self) -> List[VolumeMount]:
        return self.server_pod.additional_volume_mounts

    def add_additional_volume_mount(self, name: str, path: str) -> None:
        self.server_pod.add_additional_volume_mount(name, path)

    @property
    def pod_labels(self) -> Dict[str, str]:
        return self.server_pod.pod_labels

    def add_pod_label(self, name: str, value: str) -> None:
        self.server_pod.add_pod_label(name, value)

    @property
    def pod_annotations(self) -> Dict[str, str]:
        return self.server_pod.pod_annotations

    def add_pod_annotation(self, name: str, value: str) -> None:
        self.server_pod.add_pod_annotation(name, value)
