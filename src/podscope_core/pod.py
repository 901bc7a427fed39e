"""Pod settings carried by every configuration scope.

``ServerPod.fill_in_from`` applies one merge policy per field shape:

* single values (probe tunings, security contexts) are copied whole when unset;
* lists (env, additional volumes, additional volume mounts) are appended after
  the receiver's own entries, without de-duplication;
* maps (node selector, labels, annotations, resource requests and limits) gain
  the fallback's keys the receiver does not have; the receiver wins on conflict.

Values taken from the fallback are deep copies. The fallback is never modified.
"""

from typing import Dict, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .models import (
    ContainerSecurityContext,
    EnvVar,
    PodSecurityContext,
    ProbeTuning,
    ResourceRequirements,
    Volume,
    VolumeMount,
)

_M = TypeVar("_M", bound=BaseModel)


def _copy_optional(value: Optional[_M]) -> Optional[_M]:
    return None if value is None else value.model_copy(deep=True)


def _append_copies(target: List[_M], source: List[_M]) -> None:
    target.extend(entry.model_copy(deep=True) for entry in source)


def _add_missing_keys(target: Dict[str, str], source: Dict[str, str]) -> None:
    for key, value in source.items():
        if key not in target:
            target[key] = value


class ServerPod(BaseModel):
    """Workload-runtime settings for the pod of a server."""

    env: List[EnvVar] = Field(default_factory=list)
    liveness_probe: Optional[ProbeTuning] = None
    readiness_probe: Optional[ProbeTuning] = None
    node_selector: Dict[str, str] = Field(default_factory=dict)
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)
    pod_security_context: Optional[PodSecurityContext] = None
    container_security_context: Optional[ContainerSecurityContext] = None
    additional_volumes: List[Volume] = Field(default_factory=list)
    additional_volume_mounts: List[VolumeMount] = Field(default_factory=list)
    pod_labels: Dict[str, str] = Field(default_factory=dict)
    pod_annotations: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def fill_in_from(self, other: "ServerPod") -> None:
        """Fill unset settings from ``other`` without overwriting any of ours."""
        if self.liveness_probe is None:
            self.liveness_probe = _copy_optional(other.liveness_probe)
        if self.readiness_probe is None:
            self.readiness_probe = _copy_optional(other.readiness_probe)
        if self.pod_security_context is None:
            self.pod_security_context = _copy_optional(other.pod_security_context)
        if self.container_security_context is None:
            self.container_security_context = _copy_optional(other.container_security_context)

        _append_copies(self.env, other.env)
        _append_copies(self.additional_volumes, other.additional_volumes)
        _append_copies(self.additional_volume_mounts, other.additional_volume_mounts)

        _add_missing_keys(self.node_selector, other.node_selector)
        _add_missing_keys(self.pod_labels, other.pod_labels)
        _add_missing_keys(self.pod_annotations, other.pod_annotations)
        _add_missing_keys(self.resources.requests, other.resources.requests)
        _add_missing_keys(self.resources.limits, other.resources.limits)

    def add_env_var(self, name: str, value: Optional[str]) -> None:
        self.env.append(EnvVar(name=name, value=value))

    def set_liveness_probe(
        self,
        initial_delay: Optional[int],
        timeout: Optional[int],
        period: Optional[int],
    ) -> None:
        self.liveness_probe = ProbeTuning(
            initial_delay_seconds=initial_delay,
            timeout_seconds=timeout,
            period_seconds=period,
        )

    def set_readiness_probe(
        self,
        initial_delay: Optional[int],
        timeout: Optional[int],
        period: Optional[int],
    ) -> None:
        self.readiness_probe = ProbeTuning(
            initial_delay_seconds=initial_delay,
            timeout_seconds=timeout,
            period_seconds=period,
        )

    def add_node_selector(self, label_key: str, label_value: str) -> None:
        self.node_selector[label_key] = label_value

    def add_request_requirement(self, resource: str, quantity: str) -> None:
        self.resources.requests[resource] = quantity

    def add_limit_requirement(self, resource: str, quantity: str) -> None:
        self.resources.limits[resource] = quantity

    def add_additional_volume(self, name: str, path: str) -> None:
        self.additional_volumes.append(Volume(name=name, host_path=path))

    def add_additional_volume_mount(self, name: str, path: str) -> None:
        self.additional_volume_mounts.append(VolumeMount(name=name, mount_path=path))

    def add_pod_label(self, name: str, value: str) -> None:
        self.pod_labels[name] = value

    def add_pod_annotation(self, name: str, value: str) -> None:
        self.pod_annotations[name] = value
