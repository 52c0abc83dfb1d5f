# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan el contenido de un token cifrado."""

from typing import Literal

from pydantic import BaseModel, Field

TOKEN_VERSION = "mcv1"

# Tamaños fijos del formato mcv1.
SALT_LEN = 16
NONCE_LEN = 12
TAG_LEN = 16
FIELD_KEY_LEN = 32


class CipherEnvelope(BaseModel):
    """Representa todo lo necesario para descifrar un valor protegido.

    Attributes:
        version (str): Versión del formato de token.
        kdf (str): Algoritmo de derivación de la clave del token.
        time_cost (int): Iteraciones Argon2id usadas al cifrar.
        memory_cost (int): Memoria Argon2id en KiB; acotada para que un token
            manipulado no pueda exigir una derivación arbitrariamente cara.
        parallelism (int): Paralelismo Argon2id.
        salt (bytes): Salt aleatoria de la derivación.
        nonce (bytes): Vector de inicialización AES-GCM.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        tag (bytes): Etiqueta de autenticación generada por AES-GCM.

    """

    version: Literal["mcv1"] = TOKEN_VERSION
    kdf: Literal["argon2id"] = "argon2id"
    time_cost: int = Field(ge=1, le=10)
    memory_cost: int = Field(ge=8, le=256 * 1024)
    parallelism: int = Field(ge=1, le=16)
    salt: bytes = Field(min_length=SALT_LEN, max_length=SALT_LEN)
    nonce: bytes = Field(min_length=NONCE_LEN, max_length=NONCE_LEN)
    ciphertext: bytes
    tag: bytes = Field(min_length=TAG_LEN, max_length=TAG_LEN)
