"""Pydantic models for start directives and pod leaf values."""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ServerStartPolicy(str, Enum):
    """Whether, and when, a server should be running."""

    ALWAYS = "ALWAYS"
    NEVER = "NEVER"
    IF_NEEDED = "IF_NEEDED"
    ADMIN_ONLY = "ADMIN_ONLY"


class ServerStartState(str, Enum):
    """Runtime state a server should reach once started."""

    RUNNING = "RUNNING"
    ADMIN = "ADMIN"


class LeafModel(BaseModel):
    """Common settings for opaque pod values."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class EnvVar(LeafModel):
    """Environment variable passed to the server container."""

    name: str
    value: Optional[str] = None


class Volume(LeafModel):
    """Host-path volume added to the server pod."""

    name: str
    host_path: str = Field(..., description="Path on the node backing the volume")


class VolumeMount(LeafModel):
    """Mount of an additional volume into the server container."""

    name: str
    mount_path: str


class ProbeTuning(LeafModel):
    """Timing for a liveness or readiness probe (seconds)."""

    initial_delay_seconds: Optional[int] = Field(None, ge=0)
    timeout_seconds: Optional[int] = Field(None, ge=0)
    period_seconds: Optional[int] = Field(None, ge=0)


class PodSecurityContext(LeafModel):
    """Pod-level security settings."""

    run_as_user: Optional[int] = None
    run_as_group: Optional[int] = None
    run_as_non_root: Optional[bool] = None
    fs_group: Optional[int] = None


class ContainerSecurityContext(LeafModel):
    """Container-level security settings."""

    run_as_user: Optional[int] = None
    run_as_group: Optional[int] = None
    run_as_non_root: Optional[bool] = None
    privileged: Optional[bool] = None
    allow_privilege_escalation: Optional[bool] = None
    read_only_root_filesystem: Optional[bool] = None


class ResourceRequirements(LeafModel):
    """Resource requests and limits, keyed by resource name (e.g. "cpu")."""

    requests: Dict[str, str] = Field(default_factory=dict)
    limits: Dict[str, str] = Field(default_factory=dict)
