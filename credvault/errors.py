# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de errores expuesta por el vault de credenciales.
# --------------------------------------------------------------
"""Excepciones del vault.

Solo `KeyPersistFailed`, `InvalidKey` y `DecryptionFailed` llegan al código
llamante; `KeyStoreUnavailable` se captura siempre dentro del almacén de claves.
"""


class VaultError(Exception):
    """Error base de todas las operaciones del vault."""


class KeyStoreUnavailable(VaultError):
    """El slot de la clave no se puede leer (almacenamiento deshabilitado o corrupto)."""


class KeyPersistFailed(VaultError):
    """No se pudo persistir la nueva clave; la clave activa no ha cambiado."""


class DecryptionFailed(VaultError):
    """Token malformado, clave incorrecta o datos alterados."""


class InvalidKey(VaultError, ValueError):
    """La clave propuesta no es una cadena no vacía."""
