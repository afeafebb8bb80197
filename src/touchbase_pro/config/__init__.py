"""Configurações centralizadas do touchbase_pro.

Uso típico:
    from touchbase_pro.config import get_settings, INTERAKT_BASE_URL
"""

from touchbase_pro.config.settings import (
    INTERAKT_BASE_URL,
    MYMOBILEAPI_BASE_URL,
    TOUCHBASE_EMAIL_BASE_URL,
    TOUCHBASE_WHATSAPP_BASE_URL,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "TOUCHBASE_EMAIL_BASE_URL",
    "TOUCHBASE_WHATSAPP_BASE_URL",
    "INTERAKT_BASE_URL",
    "MYMOBILEAPI_BASE_URL",
]
