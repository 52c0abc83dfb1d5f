# --------------------------------------------------------------
# File: vault.py
# Description: Operaciones públicas de cifrado, descifrado y digest del vault.
# --------------------------------------------------------------
"""Fachada del vault de credenciales.

`Vault` recibe un `KeyStore` inyectado; las funciones de módulo (`encrypt`,
`decrypt`, `hash`, ...) usan un vault por defecto respaldado por
`config.KEY_SLOT_PATH` y construido en el primer uso.

`decrypt` falla en abierto: ante cualquier error devuelve la entrada sin tocar,
de modo que valores antiguos nunca cifrados se leen tal cual. Quien necesite
distinguir el fallo debe usar `try_decrypt`.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from credvault import config
from credvault.crypto_hash import sha256_hex
from credvault.crypto_sym import open_value, seal_value
from credvault.errors import DecryptionFailed
from credvault.key_store import KeyStore, generate_strong_key as _generate_strong_key
from credvault.legacy import decrypt_legacy, is_legacy_token
from credvault.storage import JsonFileKeyStorage
from credvault.token_codec import decode_token, encode_token, looks_like_token

__all__ = [
    "Vault",
    "encrypt",
    "decrypt",
    "try_decrypt",
    "hash",
    "reencrypt",
    "set_active_key",
    "has_custom_key",
    "generate_strong_key",
    "get_default_vault",
    "reset_default_vault",
]

logger = logging.getLogger(__name__)


class Vault:
    """Cifra y descifra valores de texto bajo la clave activa o una explícita."""

    def __init__(
        self,
        key_store: KeyStore,
        *,
        kdf_params: Optional[Dict[str, int]] = None,
        accept_legacy: Optional[bool] = None,
    ) -> None:
        self.key_store = key_store
        self.kdf_params = dict(kdf_params or config.KDF_PARAMS)
        self.accept_legacy = config.ACCEPT_LEGACY_TOKENS if accept_legacy is None else accept_legacy

    def _key(self, key: Optional[str]) -> str:
        return key or self.key_store.get_active_key()

    def encrypt(self, plaintext: str, key: Optional[str] = None) -> str:
        """Cifra `plaintext` y devuelve un token autocontenido.

        Args:
            plaintext (str): Texto a proteger; vacío devuelve `""` sin cifrar.
            key (Optional[str]): Clave explícita; si falta se usa la activa.

        Returns:
            str: Token con parámetros KDF, salt, nonce, ciphertext y tag.

        """

        if not plaintext:
            return ""
        return encode_token(seal_value(self._key(key), plaintext, self.kdf_params))

    def try_decrypt(self, token: str, key: Optional[str] = None) -> str:
        """Descifra `token` lanzando `DecryptionFailed` ante cualquier problema.

        Args:
            token (str): Token de `encrypt` (o heredado, si está habilitado).
            key (Optional[str]): Clave explícita; si falta se usa la activa.

        Returns:
            str: Texto en claro recuperado; `""` para un token vacío.

        Raises:
            DecryptionFailed: Token malformado, clave incorrecta o datos alterados.

        """

        if not token:
            return ""
        active = self._key(key)
        if self.accept_legacy and is_legacy_token(token):
            try:
                return decrypt_legacy(token, active)
            except ValueError as exc:
                raise DecryptionFailed("No se pudo descifrar el token heredado.") from exc

        if not looks_like_token(token):
            raise DecryptionFailed("El valor no tiene formato de token del vault.")
        try:
            envelope = decode_token(token)
        except ValueError as exc:
            raise DecryptionFailed("Token malformado.") from exc
        return open_value(active, envelope)

    def decrypt(self, token: str, key: Optional[str] = None) -> str:
        """Descifra `token`; ante cualquier fallo devuelve `token` sin cambios.

        El llamante no puede distinguir "nunca estuvo cifrado" de "clave
        incorrecta": debe validar la forma del resultado o usar `try_decrypt`.
        """

        try:
            return self.try_decrypt(token, key)
        except DecryptionFailed as exc:
            logger.debug("Decrypt failed open, returning input unchanged (%s)", exc)
            return token

    def hash(self, value: str) -> str:
        """Digest SHA-256 determinista en hex (64 caracteres); no apto para contraseñas."""

        return sha256_hex(value)

    def reencrypt(self, token: str, old_key: str, new_key: Optional[str] = None) -> str:
        """Descifra con `old_key` y vuelve a cifrar con `new_key` (o la activa).

        Sirve también para migrar tokens heredados al formato actual.

        Raises:
            DecryptionFailed: Si `token` no se descifra con `old_key`.

        """

        if not token:
            return ""
        return self.encrypt(self.try_decrypt(token, old_key), new_key)

    def rotate_key(self, new_key: str, tokens: Iterable[str]) -> List[str]:
        """Rota la clave activa migrando los tokens dados.

        Primero descifra todos los tokens con la clave activa actual, después
        persiste `new_key` y solo entonces vuelve a cifrar. Si algún token no se
        descifra o la clave no se persiste, se propaga el error y no se rota.

        Args:
            new_key (str): Nueva clave no vacía.
            tokens (Iterable[str]): Tokens cifrados bajo la clave activa actual.

        Returns:
            List[str]: Tokens equivalentes cifrados con `new_key`, en el mismo orden.

        Raises:
            DecryptionFailed: Si algún token no se descifra con la clave actual.
            InvalidKey: Si `new_key` está vacía.
            KeyPersistFailed: Si el slot no se pudo escribir.

        """

        with self.key_store.lock:
            old_key = self.key_store.get_active_key()
            plaintexts = [self.try_decrypt(token, old_key) for token in tokens]
            self.key_store.set_active_key(new_key)
        return [self.encrypt(plaintext, new_key) for plaintext in plaintexts]

    def set_active_key(self, new_key: str) -> None:
        self.key_store.set_active_key(new_key)

    def has_custom_key(self) -> bool:
        return self.key_store.has_custom_key()

    generate_strong_key = staticmethod(_generate_strong_key)


_default_vault: Optional[Vault] = None
_default_lock = threading.Lock()


def get_default_vault() -> Vault:
    """Devuelve el vault de proceso, respaldado por `config.KEY_SLOT_PATH`."""

    global _default_vault
    with _default_lock:
        if _default_vault is None:
            store = KeyStore(JsonFileKeyStorage(config.KEY_SLOT_PATH))
            _default_vault = Vault(store)
        return _default_vault


def reset_default_vault() -> None:
    """Descarta el vault de proceso; el siguiente uso relee la configuración."""

    global _default_vault
    with _default_lock:
        _default_vault = None


def encrypt(plaintext: str, key: Optional[str] = None) -> str:
    return get_default_vault().encrypt(plaintext, key)


def decrypt(ciphertext: str, key: Optional[str] = None) -> str:
    return get_default_vault().decrypt(ciphertext, key)


def try_decrypt(ciphertext: str, key: Optional[str] = None) -> str:
    return get_default_vault().try_decrypt(ciphertext, key)


def reencrypt(ciphertext: str, old_key: str, new_key: Optional[str] = None) -> str:
    return get_default_vault().reencrypt(ciphertext, old_key, new_key)


def set_active_key(key: str) -> None:
    get_default_vault().set_active_key(key)


def has_custom_key() -> bool:
    return get_default_vault().has_custom_key()


def generate_strong_key() -> str:
    return _generate_strong_key()


def hash(value: str) -> str:  # noqa: A001
    """Digest SHA-256 en hex de `value` (igualdad, no almacenamiento de contraseñas)."""

    return sha256_hex(value)
