"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El transporte HTTP lee base URL, versión y timeout de un único contrato.

The values are fixed for the lifetime of the process: they are read once at
startup and injected into the transport, never passed per operation.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="EVE_ITEMS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:9000",
        min_length=8,
        description="Base URL of the EVE profit backend (scheme + host + port).",
    )
    api_version: str = Field(
        default="v1",
        min_length=1,
        description="API version segment appended as /api/<version>.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="eve-items/0.1",
        min_length=1,
        description="User-Agent sent with every backend request.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level used by the CLI (DEBUG, INFO, WARNING, ...).",
    )

    @property
    def api_root(self) -> str:
        """Full prefix every endpoint path is resolved against."""

        return f"{self.api_base_url.rstrip('/')}/api/{self.api_version.strip('/')}"
