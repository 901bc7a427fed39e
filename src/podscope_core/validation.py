"""Validation of authored scope configurations.

Validation is separate from merging: the merge engine accepts whatever it is
given, while these checks report problems to whoever authored the settings.
"""

import logging
from typing import Dict, List, Optional

from .configuration import BaseConfiguration
from .errors import ConfigValidationError
from .models import ServerStartPolicy, ServerStartState
from .pod import ServerPod
from .settings import ResolverSettings

logger = logging.getLogger(__name__)


def parse_start_policy(value: Optional[str]) -> Optional[ServerStartPolicy]:
    """Parse a start policy name; None passes through.

    Raises:
        ConfigValidationError: If the name is not a legal policy
    """
    if value is None:
        return None
    try:
        return ServerStartPolicy(value)
    except ValueError:
        legal = ", ".join(p.value for p in ServerStartPolicy)
        raise ConfigValidationError([f"server_start_policy: '{value}' is not one of {legal}"])


def parse_start_state(value: Optional[str]) -> Optional[ServerStartState]:
    """Parse a start state name; None passes through.

    Raises:
        ConfigValidationError: If the name is not a legal state
    """
    if value is None:
        return None
    try:
        return ServerStartState(value)
    except ValueError:
        legal = ", ".join(s.value for s in ServerStartState)
        raise ConfigValidationError([f"server_start_state: '{value}' is not one of {legal}"])


def duplicate_names(pod: ServerPod) -> Dict[str, List[str]]:
    """Names that appear more than once in each named list of the pod.

    Duplicates are allowed; fallback entries are appended after the receiver's
    own, so consumers see both.
    """
    named_lists = {
        "env": [e.name for e in pod.env],
        "additional_volumes": [v.name for v in pod.additional_volumes],
        "additional_volume_mounts": [m.name for m in pod.additional_volume_mounts],
    }
    result: Dict[str, List[str]] = {}
    for field_name, names in named_lists.items():
        seen = set()
        dupes: List[str] = []
        for name in names:
            if name in seen and name not in dupes:
                dupes.append(name)
            seen.add(name)
        if dupes:
            result[field_name] = dupes
    return result


def validate_configuration(config: BaseConfiguration) -> List[str]:
    """
    Check a scope configuration for authoring errors.

    Args:
        config: configuration to check

    Returns:
        List of error messages (empty if validation passes)
    """
    errors = []
    pod = config.server_pod

    for idx, env_var in enumerate(pod.env):
        if not env_var.name or not env_var.name.strip():
            errors.append(f"server_pod.env[{idx}]: name must be non-empty")

    for idx, volume in enumerate(pod.additional_volumes):
        if not volume.name or not volume.name.strip():
            errors.append(f"server_pod.additional_volumes[{idx}]: name must be non-empty")
        if not volume.host_path or not volume.host_path.strip():
            errors.append(f"server_pod.additional_volumes[{idx}]: host_path must be non-empty")

    for idx, mount in enumerate(pod.additional_volume_mounts):
        if not mount.name or not mount.name.strip():
            errors.append(f"server_pod.additional_volume_mounts[{idx}]: name must be non-empty")
        if not mount.mount_path or not mount.mount_path.startswith("/"):
            errors.append(
                f"server_pod.additional_volume_mounts[{idx}]: mount_path must be an absolute path"
            )

    for map_name, mapping in (
        ("node_selector", pod.node_selector),
        ("pod_labels", pod.pod_labels),
        ("pod_annotations", pod.pod_annotations),
        ("resources.requests", pod.resources.requests),
        ("resources.limits", pod.resources.limits),
    ):
        for key in mapping:
            if not key or not key.strip():
                errors.append(f"server_pod.{map_name}: keys must be non-empty")

    return errors


def check_configuration(
    config: BaseConfiguration, settings: Optional[ResolverSettings] = None
) -> None:
    """Raise if ``config`` has authoring errors; log duplicate names as warnings.

    Raises:
        ConfigValidationError: If any errors were found
    """
    settings = settings or ResolverSettings.from_env()

    errors = validate_configuration(config)
    if errors:
        raise ConfigValidationError(errors)

    if settings.warn_on_duplicate_names:
        for field_name, names in duplicate_names(config.server_pod).items():
            logger.warning(
                "Duplicate names in %s.server_pod.%s: %s",
                type(config).__name__,
                field_name,
                ", ".join(names),
            )
