"""Configuration helpers for the intentui MCP server.

The resolution engine itself needs no configuration; these settings only
shape how the server is exposed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .domains.constraints.modifiers import PRESETS

_DEFAULT_SERVER_NAME = "Intention Resolution MCP Server"
_DEFAULT_HOST = "127.0.0.1"
_DEFAULT_PORT = 8000
_VALID_TRANSPORTS = ("stdio", "http", "sse")
_ENV_LOADED = False


@dataclass(frozen=True)
class ServerConfig:
    """Holds runtime settings for the MCP server."""

    server_name: str = _DEFAULT_SERVER_NAME
    transport: str = "stdio"
    host: str = _DEFAULT_HOST
    port: int = _DEFAULT_PORT
    path: Optional[str] = None
    log_level: str = "INFO"
    default_presets: Tuple[str, ...] = ()

    def with_overrides(
        self,
        *,
        transport: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        path: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> "ServerConfig":
        """Return a copy with the provided overrides applied."""

        cfg = self
        if transport:
            cfg = replace(cfg, transport=_validate_transport(transport, "--transport"))
        if host:
            cfg = replace(cfg, host=host)
        if port is not None:
            cfg = replace(cfg, port=port)
        if path is not None:
            cfg = replace(cfg, path=path or None)
        if log_level:
            cfg = replace(cfg, log_level=_validate_log_level(log_level, "--log-level"))
        return cfg

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level)


def _validate_transport(value: str, source: str) -> str:
    value = value.strip().lower()
    if value not in _VALID_TRANSPORTS:
        raise ValueError(f"{source} must be one of {list(_VALID_TRANSPORTS)}, got '{value}'")
    return value


def _validate_log_level(value: str, source: str) -> str:
    value = value.strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        raise ValueError(f"{source} is not a valid log level: '{value}'")
    return value


def _parse_presets(raw: str) -> Tuple[str, ...]:
    names = tuple(
        p.strip().lower().replace("_", "-") for p in raw.split(",") if p.strip()
    )
    unknown = [n for n in names if n not in PRESETS]
    if unknown:
        raise ValueError(
            f"INTENTUI_DEFAULT_PRESETS has unknown presets {unknown}. Valid: {sorted(PRESETS)}"
        )
    return names


def load_config() -> ServerConfig:
    """Load server configuration from environment variables.

    Recognised variables: INTENTUI_SERVER_NAME, INTENTUI_TRANSPORT,
    INTENTUI_HOST, INTENTUI_PORT, INTENTUI_PATH, INTENTUI_LOG_LEVEL,
    INTENTUI_DEFAULT_PRESETS (comma separated).

    Raises:
        ValueError: If a variable holds an invalid value
    """

    _ensure_env_loaded()

    raw_port = os.getenv("INTENTUI_PORT", "").strip()
    try:
        port = int(raw_port) if raw_port else _DEFAULT_PORT
    except ValueError:
        raise ValueError(f"INTENTUI_PORT must be an integer, got '{raw_port}'") from None
    if not 0 < port < 65536:
        raise ValueError(f"INTENTUI_PORT out of range: {port}")

    return ServerConfig(
        server_name=os.getenv("INTENTUI_SERVER_NAME") or _DEFAULT_SERVER_NAME,
        transport=_validate_transport(
            os.getenv("INTENTUI_TRANSPORT") or "stdio", "INTENTUI_TRANSPORT"
        ),
        host=os.getenv("INTENTUI_HOST") or _DEFAULT_HOST,
        port=port,
        path=os.getenv("INTENTUI_PATH") or None,
        log_level=_validate_log_level(
            os.getenv("INTENTUI_LOG_LEVEL") or "INFO", "INTENTUI_LOG_LEVEL"
        ),
        default_presets=_parse_presets(os.getenv("INTENTUI_DEFAULT_PRESETS", "")),
    )


def _ensure_env_loaded() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True
    dotenv_path = Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path)
    else:
        load_dotenv()  # Fallback to default search
