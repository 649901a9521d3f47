"""Centralised configuration handling for SubTally."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_RECURRENCE_STEPS = 10_000
DEFAULT_CURRENCY = "INR"
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "subscriptions.csv"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    max_recurrence_steps: int = Field(default=DEFAULT_MAX_RECURRENCE_STEPS, ge=1)
    default_currency: str = DEFAULT_CURRENCY
    data_path: Path = DEFAULT_DATA_PATH
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(env_prefix="SUBTALLY_", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("subtally")
    if secrets_section:
        overrides = {
            "max_recurrence_steps": secrets_section.get("max_recurrence_steps"),
            "default_currency": secrets_section.get("default_currency"),
            "data_path": secrets_section.get("data_path"),
            "log_level": secrets_section.get("log_level"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
