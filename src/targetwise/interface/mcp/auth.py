"""MCP auth: the console surface can submit campaigns, so it may require a key."""

from __future__ import annotations

import os

CONSOLE_KEY_ENV = "TARGETWISE_CONSOLE_KEY"


def require_console_scope() -> None:
    """Require the console key when configured. Raises PermissionError if missing."""
    from ...config.runtime import get_settings

    settings = get_settings()
    if not settings.require_console_key:
        return
    if not os.environ.get(CONSOLE_KEY_ENV):
        raise PermissionError(f"Console requires {CONSOLE_KEY_ENV} to be set")


def check_scope(mode: str) -> None:
    """Check scope for the given server mode. Call at server start or per-request."""
    if mode == "console":
        require_console_scope()
    elif mode == "preview":
        return
    else:
        raise ValueError(f"Unknown mode: {mode!r}")
