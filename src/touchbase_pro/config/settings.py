"""Configurações do touchbase_pro via variáveis de ambiente.

Credenciais nunca são hardcoded: chegam pelo ambiente (prefixo TOUCHBASE_)
ou pelo host que executa os nodes.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# URLs base das APIs upstream
# -----------------------------------------------------------------------------
TOUCHBASE_EMAIL_BASE_URL: str = "https://api.touchbasepro.io"
TOUCHBASE_WHATSAPP_BASE_URL: str = "https://api.whatsappbiz.com/v1/public"
INTERAKT_BASE_URL: str = "https://api.interakt.ai/v1/public"
MYMOBILEAPI_BASE_URL: str = "https://rest.mymobileapi.com"


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="TOUCHBASE_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "touchbase_pro"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"

    # Upstreams
    email_base_url: str = TOUCHBASE_EMAIL_BASE_URL
    whatsapp_base_url: str = TOUCHBASE_WHATSAPP_BASE_URL
    interakt_base_url: str = INTERAKT_BASE_URL
    sms_base_url: str = MYMOBILEAPI_BASE_URL
    request_timeout_seconds: float = 30.0  # Timeout HTTP (sem retry nesta camada)

    # A API de email autentica só pelo usuário (API key); a senha é fixa
    email_basic_password: str = "test1234"

    # Credenciais (conjunto touchBaseProApi)
    email_api_key: str | None = None
    whatsapp_api_key: str | None = None
    sms_username: str | None = None
    sms_password: str | None = None

    # Credencial dedicada (conjunto touchBaseProWhatsAppApi)
    whatsapp_only_api_key: str | None = None

    # Observabilidade
    correlation_id_header: str = "X-Correlation-ID"

    def validate_credentials(self) -> list[str]:
        """Valida se há ao menos uma credencial utilizável.

        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []
        if not any(
            (
                self.email_api_key,
                self.whatsapp_api_key,
                self.whatsapp_only_api_key,
                self.sms_username,
            )
        ):
            errors.append("Nenhuma credencial TouchBasePro configurada")
        if self.sms_username and not self.sms_password:
            errors.append("TOUCHBASE_SMS_USERNAME requer TOUCHBASE_SMS_PASSWORD")
        if self.sms_password and not self.sms_username:
            errors.append("TOUCHBASE_SMS_PASSWORD requer TOUCHBASE_SMS_USERNAME")
        return errors

    def credential_sets(self) -> dict[str, dict[str, str]]:
        """Monta os conjuntos de credenciais no formato esperado pelo host."""
        sets: dict[str, dict[str, str]] = {
            "touchBaseProApi": {
                "emailApiKey": self.email_api_key or "",
                "whatsappApiKey": self.whatsapp_api_key or "",
                "smsUsername": self.sms_username or "",
                "smsPassword": self.sms_password or "",
            }
        }
        if self.whatsapp_only_api_key:
            sets["touchBaseProWhatsAppApi"] = {"apiKey": self.whatsapp_only_api_key}
        return sets


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings."""
    return Settings()
