# --------------------------------------------------------------
# File: legacy.py
# Description: Lectura de tokens heredados en formato OpenSSL "Salted__".
# --------------------------------------------------------------
"""Compatibilidad de solo lectura con los valores que guardaba la versión anterior.

Esos tokens son Base64 de ``b"Salted__" + salt(8) + AES-256-CBC(PKCS#7)``, con
clave e IV obtenidos por `EVP_BytesToKey` (MD5, una iteración). No llevan
autenticación: una clave incorrecta se detecta por el relleno o por UTF-8
inválido, nunca con garantía criptográfica. `Vault.reencrypt` los migra al
formato actual.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Tuple

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

__all__ = ["is_legacy_token", "decrypt_legacy", "evp_bytes_to_key"]

LEGACY_PREFIX = "U2FsdGVkX1"
_MAGIC = b"Salted__"
_SALT_LEN = 8
_BLOCK = 16


def is_legacy_token(value: str) -> bool:
    """Indica si `value` empieza como un token OpenSSL salado en Base64."""

    return value.startswith(LEGACY_PREFIX)


def evp_bytes_to_key(password: bytes, salt: bytes, key_len: int = 32, iv_len: int = 16) -> Tuple[bytes, bytes]:
    """Reproduce `EVP_BytesToKey` de OpenSSL con MD5 y una sola iteración."""

    derived = b""
    block = b""
    while len(derived) < key_len + iv_len:
        block = hashlib.md5(block + password + salt).digest()
        derived += block
    return derived[:key_len], derived[key_len : key_len + iv_len]


def decrypt_legacy(token: str, key: str) -> str:
    """Descifra un token heredado con la clave indicada.

    Args:
        token (str): Token Base64 con cabecera `Salted__`.
        key (str): Clave textual con la que se cifró.

    Returns:
        str: Texto en claro recuperado.

    Raises:
        ValueError: Token malformado, relleno incorrecto, UTF-8 inválido o
        resultado vacío (síntomas de una clave equivocada).

    """

    try:
        raw = base64.b64decode(token, validate=True)
    except binascii.Error as exc:
        raise ValueError("Token heredado con Base64 inválido.") from exc
    if not raw.startswith(_MAGIC):
        raise ValueError("Falta la cabecera Salted__.")
    salt = raw[len(_MAGIC) : len(_MAGIC) + _SALT_LEN]
    body = raw[len(_MAGIC) + _SALT_LEN :]
    if len(salt) != _SALT_LEN or not body or len(body) % _BLOCK:
        raise ValueError("Longitud de token heredado inválida.")

    aes_key, iv = evp_bytes_to_key(key.encode("utf-8"), salt)
    decryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(body) + decryptor.finalize()
    unpadder = padding.PKCS7(_BLOCK * 8).unpadder()
    plaintext = unpadder.update(padded) + unpadder.finalize()
    if not plaintext:
        raise ValueError("El token heredado no contiene datos.")
    return plaintext.decode("utf-8")
