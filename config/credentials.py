"""API credential resolution.

Environment variables are the preferred source; CLI flags are the fallback.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


APIKEY_ENV = "EXCHANGE_APIKEY"
APISECRET_ENV = "EXCHANGE_APISECRET"


class MissingCredentialsError(RuntimeError):
    """Raised when the API key or secret cannot be resolved."""

    def __init__(self) -> None:
        super().__init__(
            f"--apikey and --apisecret must be specified. Alternatively, use "
            f"environment variables: {APIKEY_ENV} {APISECRET_ENV}"
        )


@dataclass(frozen=True)
class Credentials:
    apikey: str
    apisecret: str = field(repr=False)


def _first_non_blank(*values: Optional[str]) -> str:
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def resolve_credentials(
    apikey: Optional[str] = None,
    apisecret: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """Resolve the API key/secret pair.

    Args:
        apikey: Value of the ``--apikey`` flag, if given.
        apisecret: Value of the ``--apisecret`` flag, if given.
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        Credentials with both halves non-empty.

    Raises:
        MissingCredentialsError: If either half is missing from both sources.
    """
    env = os.environ if environ is None else environ
    resolved_key = _first_non_blank(env.get(APIKEY_ENV), apikey)
    resolved_secret = _first_non_blank(env.get(APISECRET_ENV), apisecret)
    if not resolved_key or not resolved_secret:
        raise MissingCredentialsError()
    return Credentials(apikey=resolved_key, apisecret=resolved_secret)
