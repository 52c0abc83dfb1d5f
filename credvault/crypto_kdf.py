# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación Argon2id de la clave AES de cada token del vault.
# --------------------------------------------------------------
"""Funciones de derivación de claves de token.

Cada token lleva su propia salt y los costes Argon2id con los que se cifró, así
que la clave se vuelve a derivar a partir del propio `CipherEnvelope`.
"""

import os
from typing import Dict, Mapping

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from credvault.errors import DecryptionFailed
from credvault.models import FIELD_KEY_LEN, SALT_LEN, CipherEnvelope


def new_salt() -> bytes:
    """Genera la salt aleatoria de un token nuevo."""

    return os.urandom(SALT_LEN)


def envelope_costs(params: Mapping[str, int]) -> Dict[str, int]:
    """Traduce los parámetros `t`/`m`/`p` de configuración a campos del sobre."""

    return {"time_cost": params["t"], "memory_cost": params["m"], "parallelism": params["p"]}


def derive_field_key(
    key: str,
    salt: bytes,
    *,
    time_cost: int,
    memory_cost: int,
    parallelism: int,
) -> bytes:
    """Deriva la clave AES-256 de un token a partir de la clave del vault.

    Args:
        key (str): Clave activa del vault (o la proporcionada explícitamente).
        salt (bytes): Salt del token.
        time_cost (int): Iteraciones Argon2id.
        memory_cost (int): Memoria en KiB consumida durante la derivación.
        parallelism (int): Paralelismo Argon2id.

    Returns:
        bytes: Clave de `FIELD_KEY_LEN` bytes, determinista para (key, salt, costes).

    """

    return hash_secret_raw(
        key.encode("utf-8"),
        salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=FIELD_KEY_LEN,
        type=Type.ID,
    )


def derive_envelope_key(key: str, envelope: CipherEnvelope) -> bytes:
    """Vuelve a derivar la clave de un token leído con los costes que declara.

    Raises:
        DecryptionFailed: Si Argon2id rechaza los costes del token (p. ej. memoria
        insuficiente para el paralelismo declarado).

    """

    try:
        return derive_field_key(
            key,
            envelope.salt,
            time_cost=envelope.time_cost,
            memory_cost=envelope.memory_cost,
            parallelism=envelope.parallelism,
        )
    except HashingError as exc:
        raise DecryptionFailed("Costes Argon2id del token no válidos.") from exc
