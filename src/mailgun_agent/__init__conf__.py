"""Static package metadata and layered-configuration identifiers."""

from __future__ import annotations

name = "mailgun_agent"
title = "Mailgun mailer agent: send email through the Mailgun HTTP API"
version = "1.0.0"
homepage = "https://github.com/bitranox/mailgun_agent"
author = "bitranox"

# Identifiers used by lib_layered_config to locate app/host/user config files.
LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "Mailgun Agent"
LAYEREDCONF_SLUG = "mailgun-agent"

__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "homepage",
    "name",
    "title",
    "version",
]
