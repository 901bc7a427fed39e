"""Exception taxonomy for podscope-core."""

from typing import List


class PodScopeError(Exception):
    """Base exception for all podscope errors."""

    pass


# Settings errors


class ConfigError(PodScopeError):
    """Failed to load or validate resolver settings."""

    pass


# Authored configuration errors


class ConfigValidationError(PodScopeError):
    """Authored scope configuration failed validation."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = errors
        error_list = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Validation failed:\n{error_list}")


# Resolution errors


class ResolutionError(PodScopeError):
    """Scope chain could not be resolved."""

    pass


class ScopeNotFoundError(PodScopeError):
    """Named scope is not declared in the domain."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} not found: {name}")
