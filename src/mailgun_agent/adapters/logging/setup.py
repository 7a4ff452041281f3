"""Optional rich logging for applications that embed the mailer.

Library modules only call ``logging.getLogger(__name__)``. An owner that
wants structured console output calls :func:`init_logging` once with the
loaded configuration; the ``[lib_log_rich]`` section is handed to
lib_log_rich and the stdlib logging tree is attached to it, so the
adapter's ``extra=`` fields (domain, endpoint, status) show up as context.
"""

from __future__ import annotations

from collections.abc import Mapping

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from mailgun_agent import __init__conf__

LOG_SECTION = "lib_log_rich"


class LogSectionModel(BaseModel):
    """The ``[lib_log_rich]`` table; unknown keys are forwarded unchanged.

    Example:
        >>> LogSectionModel(environment="staging").environment
        'staging'
        >>> LogSectionModel().service is None
        True
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    section: object = config.get(LOG_SECTION, default={})
    model = LogSectionModel.model_validate(dict(section) if isinstance(section, Mapping) else {})
    passthrough = model.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=model.service or __init__conf__.name,
        environment=model.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start the lib_log_rich runtime unless it is already running.

    ``.env`` files are loaded first so ``LOG_*`` variables take effect.
    Repeated calls are no-ops.
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LOG_SECTION",
    "LogSectionModel",
    "init_logging",
]
