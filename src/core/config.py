"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets the menu and the `doctor` commands read settings the same way.

Values come from `ORDER_DESK_*` variables, a project `.env`, or the per-user
`.env` written by `order-desk doctor setup`, in that order of precedence.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies).

    Goal: an installed tool keeps its defaults without editing a `.env` in the
    working directory.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "order-desk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "order-desk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "order-desk"
    return Path.home() / ".config" / "order-desk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env.

    Rules:
    - Existing keys not in `values` are kept; `None` values are skipped.
    - Keys are written sorted, one `KEY=value` per line, under a comment header.
    - `env_path` overrides the target file (used by tests).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# order-desk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Every field maps to an `ORDER_DESK_<FIELD>` variable; invalid values fail
    at startup instead of in the middle of a menu session.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORDER_DESK_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user config file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    error_log_path: Path = Field(
        default=Path("error_log.txt"),
        description="File that failed operations are appended to.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level (DEBUG, INFO, WARNING, ERROR).",
    )
    default_data_path: Path | None = Field(
        default=None,
        description="Order file loaded when the menu starts.",
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation used when writing JSON files.",
    )
    show_banner: bool = Field(
        default=True,
        description="Print the banner before the interactive menu.",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level
