"""Error types raised while assembling generator configuration."""

from __future__ import annotations


class InvalidConfigError(ValueError):
    """A required configuration value was missing or unusable.

    Raised synchronously by InjectionConfig.Builder (and by the TOML
    loader that feeds it) when a mapping or callback is None, or a hook
    reference cannot be resolved to a callable.
    """
