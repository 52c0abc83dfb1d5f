# --------------------------------------------------------------
# File: token_codec.py
# Description: Codificación textual autocontenida de los valores cifrados.
# --------------------------------------------------------------
"""Serialización de `CipherEnvelope` en un token apto para JSON o columnas de texto.

Formato::

    $mcv1$argon2id$m=<KiB>,t=<iter>,p=<lanes>$<salt>$<nonce>$<ct>$<tag>

Los campos binarios van en Base64 URL-safe sin relleno, así que el token nunca
contiene `$` dentro de un campo.
"""

from __future__ import annotations

import base64
import binascii
from typing import Dict

from pydantic import ValidationError

from credvault.models import TOKEN_VERSION, CipherEnvelope

__all__ = ["encode_token", "decode_token", "looks_like_token"]

_PREFIX = f"${TOKEN_VERSION}$"
_FIELDS = 8


def _b64u(data: bytes) -> str:
    """Codifica datos binarios en Base64 URL-safe sin relleno."""

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64u(value: str) -> bytes:
    """Decodifica Base64 URL-safe sin relleno rechazando caracteres ajenos."""

    pad = "=" * (-len(value) % 4)
    return base64.b64decode(value + pad, altchars=b"-_", validate=True)


def _parse_params(raw: str) -> Dict[str, int]:
    params: Dict[str, int] = {}
    for item in raw.split(","):
        name, sep, value = item.partition("=")
        if not sep or name in params or not value.isdigit():
            raise ValueError(f"Parámetro KDF inválido: {item!r}")
        params[name] = int(value)
    if set(params) != {"m", "t", "p"}:
        raise ValueError("Los parámetros KDF deben ser exactamente m, t y p.")
    return params


def looks_like_token(value: str) -> bool:
    """Indica si `value` tiene el prefijo de un token del formato actual."""

    return value.startswith(_PREFIX)


def encode_token(envelope: CipherEnvelope) -> str:
    """Convierte el sobre cifrado en su representación textual.

    Args:
        envelope (CipherEnvelope): Resultado completo de un cifrado.

    Returns:
        str: Token autocontenido.

    """

    params = f"m={envelope.memory_cost},t={envelope.time_cost},p={envelope.parallelism}"
    return "$".join(
        [
            "",
            envelope.version,
            envelope.kdf,
            params,
            _b64u(envelope.salt),
            _b64u(envelope.nonce),
            _b64u(envelope.ciphertext),
            _b64u(envelope.tag),
        ]
    )


def decode_token(token: str) -> CipherEnvelope:
    """Analiza un token textual y valida su estructura.

    Args:
        token (str): Token producido por `encode_token`.

    Returns:
        CipherEnvelope: Sobre con parámetros, salt, nonce, ciphertext y tag.

    Raises:
        ValueError: Si el token está malformado de cualquier manera.

    """

    parts = token.split("$")
    if len(parts) != _FIELDS or parts[0] != "":
        raise ValueError("Estructura de token no reconocida.")
    _, version, kdf, raw_params, salt, nonce, ciphertext, tag = parts
    params = _parse_params(raw_params)
    try:
        return CipherEnvelope(
            version=version,
            kdf=kdf,
            time_cost=params["t"],
            memory_cost=params["m"],
            parallelism=params["p"],
            salt=_unb64u(salt),
            nonce=_unb64u(nonce),
            ciphertext=_unb64u(ciphertext),
            tag=_unb64u(tag),
        )
    except (binascii.Error, ValidationError) as exc:
        raise ValueError(f"Token inválido: {exc}") from exc
