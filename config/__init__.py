"""Runtime configuration and credential resolution."""
from config.credentials import (
    APIKEY_ENV,
    APISECRET_ENV,
    Credentials,
    MissingCredentialsError,
    resolve_credentials,
)
from config.settings import DEFAULT_EXCHANGE_ID, Settings, load_settings

__all__ = [
    "APIKEY_ENV",
    "APISECRET_ENV",
    "Credentials",
    "MissingCredentialsError",
    "resolve_credentials",
    "DEFAULT_EXCHANGE_ID",
    "Settings",
    "load_settings",
]
