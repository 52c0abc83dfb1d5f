# --------------------------------------------------------------
# File: key_store.py
# Description: Ciclo de vida de la clave activa del vault.
# --------------------------------------------------------------
"""Almacén de la clave activa: clave por defecto, personalizada y rotación.

La lectura prioriza la disponibilidad: si el almacenamiento falla se usa la clave
por defecto, que es pública. Ese camino se registra como aviso y queda visible
en `key_source()`, para que quien necesite una clave propia lo compruebe con
`has_custom_key()`.
"""

from __future__ import annotations

import enum
import logging
import os
import threading
from typing import Optional, Tuple

from credvault import config
from credvault.errors import InvalidKey, KeyPersistFailed, KeyStoreUnavailable
from credvault.key_policy import check_key_strength
from credvault.storage import KeyStorage

__all__ = ["KeySource", "KeyStore", "generate_strong_key"]

logger = logging.getLogger(__name__)

STRONG_KEY_BYTES = 32


class KeySource(str, enum.Enum):
    """Origen de la clave activa."""

    CUSTOM = "custom"
    DEFAULT = "default"
    FALLBACK = "fallback"  # almacenamiento no disponible


def generate_strong_key() -> str:
    """Genera una clave de 256 bits aleatorios en hex minúscula (64 caracteres).

    No la activa: hay que pasarla a `KeyStore.set_active_key`.
    """

    return os.urandom(STRONG_KEY_BYTES).hex()


class KeyStore:
    """Guarda la clave activa en un slot fijo de un `KeyStorage` inyectado."""

    generate_strong_key = staticmethod(generate_strong_key)

    def __init__(
        self,
        storage: KeyStorage,
        *,
        slot: Optional[str] = None,
        default_key: Optional[str] = None,
    ) -> None:
        self.storage = storage
        self.slot = slot or config.KEY_SLOT
        self.default_key = default_key or config.DEFAULT_KEY
        self.lock = threading.RLock()
        self._warned_default = False

    def _resolve(self) -> Tuple[str, KeySource]:
        with self.lock:
            try:
                stored = self.storage.read(self.slot)
            except KeyStoreUnavailable as exc:
                logger.warning("Key slot unavailable, falling back to the public default key (%s)", exc)
                return self.default_key, KeySource.FALLBACK
        if stored:
            return stored, KeySource.CUSTOM
        return self.default_key, KeySource.DEFAULT

    def get_active_key(self) -> str:
        """Devuelve la clave personalizada si existe; si no, la clave por defecto.

        Nunca falla: un almacenamiento ilegible equivale a no tener clave propia.
        """

        key, source = self._resolve()
        if source is not KeySource.CUSTOM and not self._warned_default:
            self._warned_default = True
            logger.warning("No custom vault key configured; values are protected only by the public default key")
        return key

    def key_source(self) -> KeySource:
        """Indica de qué rama sale la clave activa en este momento."""

        return self._resolve()[1]

    def has_custom_key(self) -> bool:
        """True si hay una clave personalizada no vacía persistida y legible."""

        return self.key_source() is KeySource.CUSTOM

    def set_active_key(self, new_key: str) -> None:
        """Persiste `new_key` como clave activa, sustituyendo la anterior.

        No vuelve a cifrar los datos existentes: véase `Vault.rotate_key`.

        Args:
            new_key (str): Clave no vacía.

        Raises:
            InvalidKey: Si `new_key` no es una cadena no vacía.
            KeyPersistFailed: Si el slot no se pudo escribir; la clave activa
            sigue siendo la anterior.

        """

        if not isinstance(new_key, str) or not new_key:
            raise InvalidKey("La clave del vault debe ser una cadena no vacía.")

        ok, reasons, score = check_key_strength(new_key)
        if not ok:
            logger.warning("Weak vault key accepted (score=%d/100): %s", score, " ".join(reasons))

        with self.lock:
            try:
                self.storage.write(self.slot, new_key)
            except OSError as exc:
                raise KeyPersistFailed(f"No se pudo guardar la clave en el slot {self.slot!r}.") from exc
            self._warned_default = False
        logger.info("Vault key rotated (slot=%s)", self.slot)
