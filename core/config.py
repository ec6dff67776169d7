"""
core/config.py
--------------
Central configuration for the CoasterForge backend.

- `Settings` collects every tunable in one place; `Settings.from_env()` lets
  environment variables override the defaults.
- `EnrichmentConfig` is the explicit, immutable slice handed to the AI
  enrichment client at construction. Nothing below the API layer reads
  `os.environ` on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Optional

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_DB_URL = f"sqlite:///{os.path.join(ROOT_DIR, 'database', 'coasterforge.db')}"

DEFAULT_MODEL = "gpt-4.1-nano"
DEFAULT_MAX_TOKENS = 500
DEFAULT_TIMEOUT = 60.0  # seconds


@dataclass(frozen=True)
class EnrichmentConfig:
    """Connection details for the text-generation API."""
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    @property
    def completions_url(self) -> str:
        return f"{(self.base_url or '').rstrip('/')}/chat/completions"

    def __repr__(self) -> str:
        # never echo the key
        return (
            f"EnrichmentConfig(base_url={self.base_url!r}, api_key={'***' if self.api_key else None}, "
            f"model={self.model!r}, max_tokens={self.max_tokens}, timeout={self.timeout})"
        )


@dataclass
class Settings:
    """Backend configuration. Environment variables of the same name override defaults."""

    # Database
    DATABASE_URL: str = DEFAULT_DB_URL
    DB_ECHO: bool = False
    SEED_REFERENCE_DATA: bool = True

    # Text generation
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = DEFAULT_MODEL
    OPENAI_MAX_TOKENS: int = DEFAULT_MAX_TOKENS
    OPENAI_TIMEOUT: float = DEFAULT_TIMEOUT

    # Optional Supabase activity log
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # Misc
    LOG_LEVEL: str = "INFO"
    BACKEND_VERSION: str = "1.0.0"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """Build settings from defaults overridden by `environ` (defaults to os.environ)."""
        env = os.environ if environ is None else environ
        settings = cls()
        for f in fields(cls):
            raw = env.get(f.name)
            if raw is None:
                continue
            setattr(settings, f.name, _coerce(getattr(settings, f.name), f.type, raw))
        return settings

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

    def enrichment_config(self) -> EnrichmentConfig:
        return EnrichmentConfig(
            base_url=self.OPENAI_BASE_URL,
            api_key=self.OPENAI_API_KEY,
            model=self.OPENAI_MODEL,
            max_tokens=int(self.OPENAI_MAX_TOKENS),
            timeout=float(self.OPENAI_TIMEOUT),
        )


def _coerce(current, declared_type, raw: str):
    """Convert an env string to the type of the field it overrides."""
    type_name = declared_type if isinstance(declared_type, str) else getattr(declared_type, "__name__", "")
    if isinstance(current, bool) or type_name == "bool":
        return raw.strip().lower() in ("true", "1", "yes")
    if isinstance(current, int) or type_name == "int":
        return int(raw)
    if isinstance(current, float) or type_name == "float":
        return float(raw)
    return raw
