# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de la capa de cifrado del vault de credenciales.
# --------------------------------------------------------------
"""Inicializa el paquete `credvault` y documenta sus módulos principales.

Las operaciones públicas (`encrypt`, `decrypt`, `try_decrypt`, `hash`,
`set_active_key`, `has_custom_key`, `generate_strong_key`) viven en
`credvault.vault`.
"""

__version__ = "1.0.0"

__all__ = [
    "config",
    "crypto_hash",
    "crypto_kdf",
    "crypto_sym",
    "errors",
    "key_policy",
    "key_store",
    "legacy",
    "log",
    "models",
    "storage",
    "token_codec",
    "vault",
]
