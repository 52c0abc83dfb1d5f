# --------------------------------------------------------------
# File: storage.py
# Description: Backends de persistencia para el slot de la clave activa.
# --------------------------------------------------------------
"""Almacenes clave-valor locales donde vive la clave personalizada del vault."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional, Protocol

from credvault.errors import KeyStoreUnavailable

__all__ = ["KeyStorage", "JsonFileKeyStorage", "MemoryKeyStorage"]


class KeyStorage(Protocol):
    """Contrato mínimo de un almacén de slots.

    `read` devuelve `None` si el slot no existe y lanza `KeyStoreUnavailable`
    si el almacén no se puede leer; `write` propaga `OSError`.
    """

    def read(self, slot: str) -> Optional[str]: ...

    def write(self, slot: str, value: str) -> None: ...


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


class JsonFileKeyStorage:
    """Slots guardados en un objeto JSON con escritura atómica."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _load(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as handler:
                data = json.load(handler)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError, RecursionError) as exc:
            raise KeyStoreUnavailable(f"No se puede leer {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise KeyStoreUnavailable(f"{self.path} no contiene un objeto JSON.")
        return data

    def read(self, slot: str) -> Optional[str]:
        """Devuelve el valor del slot o `None` si no está definido.

        Args:
            slot (str): Identificador fijo del slot.

        Returns:
            Optional[str]: Valor guardado; los valores no textuales se ignoran.

        """

        value = self._load().get(slot)
        return value if isinstance(value, str) else None

    def write(self, slot: str, value: str) -> None:
        """Guarda el slot conservando el resto del archivo (escritura atómica)."""

        try:
            data = self._load()
        except KeyStoreUnavailable:
            data = {}
        data[slot] = value
        _ensure_parent_dir(self.path)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as handler:
                json.dump(data, handler, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class MemoryKeyStorage:
    """Almacén en memoria; `available=False` simula un almacenamiento deshabilitado."""

    def __init__(self, initial: Optional[Dict[str, str]] = None, *, available: bool = True) -> None:
        self.slots: Dict[str, str] = dict(initial or {})
        self.available = available

    def read(self, slot: str) -> Optional[str]:
        if not self.available:
            raise KeyStoreUnavailable("Almacenamiento en memoria deshabilitado.")
        return self.slots.get(slot)

    def write(self, slot: str, value: str) -> None:
        if not self.available:
            raise OSError("Almacenamiento en memoria deshabilitado.")
        self.slots[slot] = value
