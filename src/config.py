"""
Configuration loading for the admin import client.

Configuration is read from a JSON file (``config/admin_config.json`` by
default) or supplied directly as a dictionary.  Missing keys are filled with
defaults, and secrets fall back to environment variables so the JSON file can
be committed without them.

Sections:

``admin``
    ``base_url`` of the console backend plus either a ``session_cookie``
    (the ``connect.sid`` value of a logged-in admin) or an ``api_token``.
    ``timeout`` is passed to ``requests``; ``None`` waits indefinitely.
``wordpress``
    Source site credentials sent with a WordPress import.
``imports``
    Pacing and dialog timing for the import orchestrator.
``gemini``
    API key and model for local transcript conversion.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

DEFAULT_CONFIG_FILE = os.path.join("config", "admin_config.json")


def load_config(config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> Dict[str, Any]:
    if config_file and os.path.exists(config_file):
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    elif config is None:
        config = {}

    # Ensure essential keys exist to prevent KeyErrors
    config.setdefault("admin", {})
    config["admin"].setdefault("base_url", os.getenv("ADMIN_BASE_URL", "http://localhost:5000"))
    config["admin"].setdefault("session_cookie", os.getenv("ADMIN_SESSION_COOKIE", ""))
    config["admin"].setdefault("api_token", os.getenv("ADMIN_API_TOKEN", ""))
    config["admin"].setdefault("timeout", None)

    config.setdefault("wordpress", {})
    config["wordpress"].setdefault("url", os.getenv("WORDPRESS_URL", ""))
    config["wordpress"].setdefault("username", os.getenv("WORDPRESS_USERNAME", ""))
    config["wordpress"].setdefault("password", os.getenv("WORDPRESS_PASSWORD", ""))

    config.setdefault("imports", {})
    config["imports"].setdefault("default_limit", 10)
    config["imports"].setdefault("close_delay_seconds", 3.0)
    config["imports"].setdefault("transcript_interval_seconds", 1.0)
    config["imports"].setdefault("reveal_interval_seconds", 0.2)

    config.setdefault("gemini", {})
    config["gemini"].setdefault("api_key", os.getenv("GOOGLE_API_KEY", ""))
    config["gemini"].setdefault("model", "gemini-2.5-flash")

    return config
