"""Configuration helpers for aria-view runtimes."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_DEFAULT_RECOVERY_LOG_LEVEL = "DEBUG"
_FALSE_VALUES = {"0", "false", "no", "off"}
_ENV_LOADED = False


@dataclass(frozen=True)
class ViewRuntimeConfig:
    """Holds runtime settings for registries and view factories."""

    attribute_table: Optional[Path] = None
    recovery_log_level: int = logging.DEBUG
    freeze_registry: bool = True

    def with_overrides(
        self,
        *,
        attribute_table: Optional[Path] = None,
        recovery_log_level: Optional[int] = None,
        freeze_registry: Optional[bool] = None,
    ) -> "ViewRuntimeConfig":
        """Return a copy with the provided overrides applied."""

        cfg = self
        if attribute_table is not None:
            cfg = replace(cfg, attribute_table=Path(attribute_table))
        if recovery_log_level is not None:
            cfg = replace(cfg, recovery_log_level=recovery_log_level)
        if freeze_registry is not None:
            cfg = replace(cfg, freeze_registry=freeze_registry)
        return cfg


def load_view_config(
    *,
    attribute_table: Optional[str] = None,
    recovery_log_level: Optional[str] = None,
    freeze_registry: Optional[bool] = None,
) -> ViewRuntimeConfig:
    """Load runtime configuration from environment variables and overrides."""

    _ensure_env_loaded()

    raw_table = attribute_table or os.getenv("ARIAVIEW_ATTRIBUTE_TABLE", "").strip()
    resolved_table = Path(raw_table) if raw_table else None

    level_name = (
        recovery_log_level
        or os.getenv("ARIAVIEW_RECOVERY_LOG_LEVEL")
        or _DEFAULT_RECOVERY_LOG_LEVEL
    )
    resolved_level = _parse_log_level(level_name)

    if freeze_registry is None:
        raw_freeze = os.getenv("ARIAVIEW_FREEZE_REGISTRY", "1").strip().lower()
        freeze_registry = raw_freeze not in _FALSE_VALUES

    return ViewRuntimeConfig(
        attribute_table=resolved_table,
        recovery_log_level=resolved_level,
        freeze_registry=freeze_registry,
    )


def _parse_log_level(name: str) -> int:
    value = name.strip().upper()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    if not isinstance(level, int):
        raise ValueError(
            f"ARIAVIEW_RECOVERY_LOG_LEVEL must be a logging level name, got '{name}'"
        )
    return level


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
