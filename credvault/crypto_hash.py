# --------------------------------------------------------------
# File: crypto_hash.py
# Description: Resumen SHA-256 determinista para comparar secretos sin exponerlos.
# --------------------------------------------------------------
"""Digest de igualdad del vault.

Sin salt a propósito: dos entradas iguales producen el mismo digest. Sirve para
comparar secretos ya aleatorios (API keys, tokens), NO para almacenar
contraseñas elegidas por personas frente a ataques de fuerza bruta.
"""

import hashlib
import hmac


def sha256_hex(value: str) -> str:
    """Devuelve el SHA-256 de `value` en UTF-8 como 64 caracteres hex en minúscula."""

    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def digest_matches(value: str, digest: str) -> bool:
    """Compara en tiempo constante el digest de `value` con uno almacenado."""

    return hmac.compare_digest(sha256_hex(value).encode("ascii"), digest.lower().encode("utf-8"))
