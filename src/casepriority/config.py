"""
casepriority Configuration

Runtime settings read from environment variables. Settings are resolved once
per call to load_settings(); callers that need a stable view (the default
registry, the API) hold on to the returned instance.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


ENV_PREFIX = "CASEPRIORITY_"

DEFAULT_JURISDICTION = "qc_spvm_v1"
FALLBACK_JURISDICTION = "generic"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Engine settings.

    Attributes:
        default_jurisdiction: Profile used when the caller supplies no ID
        fallback_jurisdiction: Profile used for unknown IDs
        profiles_dir: Optional directory of additional YAML/JSON profiles
        strict_version: Reject profiles with an incompatible schema_version
        log_level: Log level for the API and CLI
        docs_enabled: Expose the FastAPI docs endpoints
    """
    default_jurisdiction: str = DEFAULT_JURISDICTION
    fallback_jurisdiction: str = FALLBACK_JURISDICTION
    profiles_dir: Optional[Path] = None
    strict_version: bool = True
    log_level: str = "INFO"
    docs_enabled: bool = True


def load_settings() -> Settings:
    """Build Settings from CASEPRIORITY_* environment variables."""
    profiles_dir = os.getenv(f"{ENV_PREFIX}PROFILES_DIR")
    return Settings(
        default_jurisdiction=os.getenv(
            f"{ENV_PREFIX}DEFAULT_JURISDICTION", DEFAULT_JURISDICTION
        ),
        fallback_jurisdiction=os.getenv(
            f"{ENV_PREFIX}FALLBACK_JURISDICTION", FALLBACK_JURISDICTION
        ),
        profiles_dir=Path(profiles_dir) if profiles_dir else None,
        strict_version=_env_bool(f"{ENV_PREFIX}STRICT_VERSION", True),
        log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
        docs_enabled=_env_bool(f"{ENV_PREFIX}DOCS_ENABLED", True),
    )
