"""podscope core - hierarchical scope configuration for managed servers."""

from .__version__ import __version__, __version_info__

from .configuration import BaseConfiguration, should_override_start_policy
from .domain import AdminServer, ClusterSpec, DomainSpec, EffectiveServerSpec, ManagedServer
from .errors import (
    ConfigError,
    ConfigValidationError,
    PodScopeError,
    ResolutionError,
    ScopeNotFoundError,
)
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
from .resolution import fill_in_chain, resolve_effective
from .settings import ResolverSettings, configure_logging
from .validation import (
    check_configuration,
    duplicate_names,
    parse_start_policy,
    parse_start_state,
    validate_configuration,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Configuration
    "BaseConfiguration",
    "should_override_start_policy",
    "ServerPod",
    # Domain
    "AdminServer",
    "ClusterSpec",
    "DomainSpec",
    "EffectiveServerSpec",
    "ManagedServer",
    # Models
    "ContainerSecurityContext",
    "EnvVar",
    "PodSecurityContext",
    "ProbeTuning",
    "ResourceRequirements",
    "ServerStartPolicy",
    "ServerStartState",
    "Volume",
    "VolumeMount",
    # Resolution
    "fill_in_chain",
    "resolve_effective",
    # Settings
    "ResolverSettings",
    "configure_logging",
    # Validation
    "check_configuration",
    "duplicate_names",
    "parse_start_policy",
    "parse_start_state",
    "validate_configuration",
    # Errors
    "PodScopeError",
    "ConfigError",
    "ConfigValidationError",
    "ResolutionError",
    "ScopeNotFoundError",
]
