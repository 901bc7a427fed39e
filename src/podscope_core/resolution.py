"""Scope-walking resolution of an effective configuration.

Scopes are passed most specific first, e.g. ``[managed_server, cluster, domain]``.
The first scope is copied and completed from each broader scope in turn, so the
authored records are left untouched and may be shared between resolutions.
"""

import logging
from typing import Optional, Sequence, TypeVar

from .configuration import BaseConfiguration
from .errors import ResolutionError

logger = logging.getLogger(__name__)

_C = TypeVar("_C", bound=BaseConfiguration)


def resolve_effective(scopes: Sequence[Optional[BaseConfiguration]]) -> BaseConfiguration:
    """Resolve the effective configuration for the most specific scope.

    Args:
        scopes: configurations ordered from most specific to most general;
            ``None`` entries stand for undeclared scopes and contribute nothing

    Returns:
        A new configuration of the most specific scope's type

    Raises:
        ResolutionError: If no scope is given or the most specific one is None
    """
    if not scopes:
        raise ResolutionError("At least one scope is required")
    if scopes[0] is None:
        raise ResolutionError("The most specific scope must be declared")

    effective = scopes[0].model_copy(deep=True)
    for fallback in scopes[1:]:
        if fallback is None:
            continue
        logger.debug(
            "Filling %s from %s", type(effective).__name__, type(fallback).__name__
        )
        effective.fill_in_from(fallback)
    return effective


def fill_in_chain(receiver: _C, *fallbacks: Optional[BaseConfiguration]) -> _C:
    """Complete ``receiver`` in place from each fallback, in order, and return it."""
    for fallback in fallbacks:
        receiver.fill_in_from(fallback)
    return receiver
