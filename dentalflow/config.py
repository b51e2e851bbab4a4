"""
Configuración central de la aplicación.
Usa Pydantic BaseSettings para validar variables de entorno.
"""

from decimal import Decimal
from functools import lru_cache
from typing import List

from dateutil import tz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────
    APP_NAME: str = "DentalFlow"
    APP_ENV: str = "development"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"

    # ── Server ───────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ── Database (slots clave-valor) ─────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./dentalflow.db"

    # ── Snapshot ─────────────────────────────────────
    SNAPSHOT_KEY: str = "dentalflow_db_v7"
    LOGO_KEY: str = "dentalflow_logo"
    # Clave Fernet opcional; vacía = snapshot en texto plano
    SNAPSHOT_ENCRYPTION_KEY: str = ""
    SEED_DEMO_DATA: bool = False

    # ── Negocio ──────────────────────────────────────
    DEFAULT_FINANCIAL_GOAL: Decimal = Decimal("3300")
    RECENT_TREATED_LIMIT: int = 5
    SEARCH_RESULTS_LIMIT: int = 10
    # Zona IANA de los reportes (ej: America/La_Paz); vacía = zona del sistema
    TIMEZONE: str = ""

    # ── CORS ─────────────────────────────────────────
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        v = v.strip()
        if v and tz.gettz(v) is None:
            raise ValueError(f"Zona horaria desconocida: {v}")
        return v

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
