"""Logging stand-in used by :func:`mailgun_agent.composition.build_testing`.

Leaves the lib_log_rich runtime untouched so tests that build a mailer via
``get_mailer`` do not install global handlers.
"""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept the configuration and do nothing."""
    del config


__all__ = ["init_logging_in_memory"]
