from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import streamlit as st


class ConfigError(Exception):
    """Raised when a required secret is missing."""


# ---------------------- DATA CLASSES ----------------------

@dataclass
class SupabaseConfig:
    url: str
    anon_key: str


@dataclass
class BusinessConfig:
    name: str = "PEZÃO"
    tagline: str = "Marido de Aluguel"
    whatsapp_number: str = "5514998742493"
    display_phone: str = "(14) 99874-2493"
    opening_hours: str = "Segunda à Sábado das 8h às 18h"
    instagram_url: str = "https://www.instagram.com/caiozinsly/"
    timezone: str = "America/Sao_Paulo"


@dataclass
class StorageConfig:
    bookings_table: str = "agendamentos"
    photo_bucket: str = "agendamento-fotos"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = False


@dataclass
class AppConfig:
    supabase: SupabaseConfig
    business: BusinessConfig = field(default_factory=BusinessConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------- LOADING ----------------------

def _section(secrets: Mapping[str, Any], name: str) -> dict:
    if name in secrets:
        return dict(secrets[name])
    return {}


def load_config(secrets: Optional[Mapping[str, Any]] = None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Supabase ---
    # the anon key is enough: the bookings table relies on RLS policies
    supabase = _section(secrets, "supabase")
    url = supabase.get("url")
    key = supabase.get("anon_key") or supabase.get("key")
    if not url or not key:
        raise ConfigError("Missing [supabase] url / anon_key in secrets.toml")

    # --- Business, storage, logging: every key is optional ---
    business = _section(secrets, "business")
    storage = _section(secrets, "storage")
    logging_section = _section(secrets, "logging")

    business_cfg = BusinessConfig(**{
        k: str(v) for k, v in business.items()
        if k in BusinessConfig.__dataclass_fields__
    })
    storage_cfg = StorageConfig(**{
        k: str(v) for k, v in storage.items()
        if k in StorageConfig.__dataclass_fields__
    })
    logging_cfg = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
        json=bool(logging_section.get("json", False)),
    )

    return AppConfig(
        supabase=SupabaseConfig(url=url, anon_key=key),
        business=business_cfg,
        storage=storage_cfg,
        logging=logging_cfg,
    )
