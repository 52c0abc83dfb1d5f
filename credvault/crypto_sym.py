# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Sellado AES-256-GCM de valores de texto en sobres del vault.
# --------------------------------------------------------------
"""Cifrado simétrico de credenciales.

`seal_value` produce un `CipherEnvelope` completo (salt, costes, nonce,
ciphertext y tag) y `open_value` lo invierte. Ambos trabajan con texto: la
codificación UTF-8 y la verificación de la etiqueta quedan dentro de este módulo.
"""

import os
from typing import Mapping

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from credvault.crypto_kdf import derive_envelope_key, derive_field_key, envelope_costs, new_salt
from credvault.errors import DecryptionFailed
from credvault.models import NONCE_LEN, TAG_LEN, CipherEnvelope


def seal_value(key: str, plaintext: str, params: Mapping[str, int]) -> CipherEnvelope:
    """Cifra un texto no vacío bajo `key` con salt y nonce nuevos.

    Args:
        key (str): Clave textual del vault.
        plaintext (str): Valor a proteger.
        params (Mapping[str, int]): Costes Argon2id `t`, `m` y `p`.

    Returns:
        CipherEnvelope: Sobre listo para `encode_token`.

    """

    costs = envelope_costs(params)
    salt = new_salt()
    nonce = os.urandom(NONCE_LEN)
    field_key = derive_field_key(key, salt, **costs)
    sealed = AESGCM(field_key).encrypt(nonce, plaintext.encode("utf-8"), None)
    return CipherEnvelope(
        **costs,
        salt=salt,
        nonce=nonce,
        ciphertext=sealed[:-TAG_LEN],
        tag=sealed[-TAG_LEN:],
    )


def open_value(key: str, envelope: CipherEnvelope) -> str:
    """Recupera el texto de un sobre verificando antes su etiqueta.

    Args:
        key (str): Clave textual con la que se supone cifrado el sobre.
        envelope (CipherEnvelope): Sobre decodificado de un token.

    Returns:
        str: Texto en claro.

    Raises:
        DecryptionFailed: Clave incorrecta, datos alterados o contenido no UTF-8.

    """

    field_key = derive_envelope_key(key, envelope)
    try:
        data = AESGCM(field_key).decrypt(envelope.nonce, envelope.ciphertext + envelope.tag, None)
    except InvalidTag as exc:
        raise DecryptionFailed("Clave incorrecta o token alterado.") from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecryptionFailed("El contenido descifrado no es UTF-8.") from exc
