"""Layered configuration for the Mailgun mailer.

Settings are merged by lib_layered_config in the order
defaults -> app -> host -> user -> dotenv -> env, so deployments keep the
API key out of files and pass it as ``MAILGUN_AGENT___MAILGUN__API_KEY``.

Contents:
    * :func:`get_default_config_path` - bundled ``defaultconfig.toml``.
    * :func:`validate_profile` - reject unsafe profile names.
    * :data:`get_config` - cached loader with ``cache_clear()``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from mailgun_agent import __init__conf__

_DEFAULT_CONFIG_FILE = Path(__file__).with_name("defaultconfig.toml")


def get_default_config_path() -> Path:
    """Return the ``defaultconfig.toml`` shipped next to this module.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return _DEFAULT_CONFIG_FILE


def validate_profile(profile: str, max_length: int = DEFAULT_MAX_PROFILE_LENGTH) -> None:
    """Raise ``ValueError`` for profile names that are empty, too long or escape the config tree.

    Example:
        >>> validate_profile("staging-v2")
        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../secrets
    """
    validate_profile_name(profile, max_length=max_length)


@lru_cache(maxsize=4)
def _read_mailer_config(profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=_DEFAULT_CONFIG_FILE,
        start_dir=start_dir,
    )


class _CachedConfigLoader:
    """Callable returning one shared :class:`Config` per ``(profile, start_dir)``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config:
        """Load the ``[mailgun]``, ``[mailgun.options]`` and ``[lib_log_rich]`` settings.

        Args:
            profile: Optional profile such as ``"production"``; adds a
                ``profile/<name>/`` level to every config path.
            start_dir: Directory where ``.env`` discovery starts; the
                working directory when None.

        Raises:
            ValueError: The profile name is invalid.
        """
        if profile is not None:
            validate_profile(profile)
        return _read_mailer_config(profile, start_dir)

    def cache_clear(self) -> None:
        """Forget loaded configurations so the next call re-reads every layer."""
        _read_mailer_config.cache_clear()


get_config = _CachedConfigLoader()


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
