"""
config/settings.py — Canonical configuration contract for the Pandal Navigator
operational scripts.

Uses pydantic-settings to load, validate, and type-check the environment
variables the backend needs before (and after) the move to MongoDB Atlas.
The scripts never read os.environ directly; they receive a Settings value.

Two usage modes:
  Production / scripts:
      cfg = load_settings()                  # reads from .env + os.environ
      cfg = load_settings("backend/.env")    # override env file path

  Tests (isolated — no env file, no os.environ bleed):
      cfg = Settings(MONGODB_ATLAS_URI="mongodb+srv://...", ...)
      # All values come exclusively from kwargs → clean, reproducible.
"""
from __future__ import annotations

import os
import re
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_OPTIONAL_STR_FIELDS = (
    "MONGODB_ATLAS_URI",
    "MONGODB_URI",
    "GOOGLE_MAPS_API_KEY",
    "CLERK_SECRET_KEY",
    "JWT_SECRET",
    "NODE_ENV",
)


class Settings(BaseSettings):
    # Only kwargs feed the model. load_settings() supplies the env file and
    # os.environ explicitly, so Settings() stays a pure validation contract.
    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    # -------------------------------------------------------------------------
    # Data stores
    # -------------------------------------------------------------------------
    MONGODB_ATLAS_URI: Optional[str] = None
    MONGODB_URI: Optional[str] = None
    LOCAL_MONGODB_URI: str = "mongodb://localhost:27017/pandal-navigator"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: Optional[int] = None

    # -------------------------------------------------------------------------
    # Third-party credentials
    # -------------------------------------------------------------------------
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    CLERK_SECRET_KEY: Optional[str] = None
    JWT_SECRET: Optional[str] = None

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------
    PORT: Optional[int] = None
    NODE_ENV: Optional[str] = None

    # -------------------------------------------------------------------------
    # Atlas migration expectations
    # -------------------------------------------------------------------------
    ATLAS_DATABASE_NAME: str = "pandal-navigator"
    ATLAS_URI_SCHEME: str = "mongodb+srv://"
    SETUP_GUIDE: str = "ATLAS_SETUP_GUIDE.md"
    MIGRATE_COMMAND: str = "npm run migrate-atlas"

    # -------------------------------------------------------------------------
    # Convenience properties
    # -------------------------------------------------------------------------

    @property
    def setup_database_uri(self) -> str:
        """Target of the backend setup check: the configured URI or the local default."""
        return self.MONGODB_URI or self.LOCAL_MONGODB_URI

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator(*_OPTIONAL_STR_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """`KEY=` in a .env file means unset, not an empty credential."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("PORT", "MONGO_SERVER_SELECTION_TIMEOUT_MS", mode="before")
    @classmethod
    def blank_int_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        if self.MONGO_SERVER_SELECTION_TIMEOUT_MS is not None and self.MONGO_SERVER_SELECTION_TIMEOUT_MS < 1:
            raise ValueError("MONGO_SERVER_SELECTION_TIMEOUT_MS must be >= 1 when set")
        if not self.ATLAS_DATABASE_NAME.strip():
            raise ValueError("ATLAS_DATABASE_NAME must not be empty")
        return self


def _parse_env_file(env_file: str) -> dict[str, str]:
    file_vals: dict[str, str] = {}
    try:
        with open(env_file, encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                k, _, v = line.partition("=")
                k = k.strip()
                v = v.strip()
                quote = v[:1]
                if quote in ("'", '"') and quote in v[1:]:
                    # Quoted values keep any '#' inside the quotes
                    v = v[1 : v.index(quote, 1)]
                else:
                    # Strip inline comments: "5000   # dev port" → "5000"
                    v = re.sub(r"\s+#.*$", "", v)
                if k:
                    file_vals[k] = v
    except FileNotFoundError:
        pass
    return file_vals


def load_settings(env_file: str = ".env") -> Settings:
    """Load and validate settings from an env file + os.environ.

    os.environ takes precedence over env file values, the same way dotenv
    never overrides variables that are already exported. A missing env file
    is fine: everything may come from the environment.

    Raises:
        ValidationError: if a value has the wrong type or is out of range.
    """
    merged = {**_parse_env_file(env_file), **os.environ}  # os.environ wins
    known = {k: v for k, v in merged.items() if k in Settings.model_fields}
    return Settings(**known)
