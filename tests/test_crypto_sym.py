# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del sellado y apertura AES-GCM de valores del vault.
# --------------------------------------------------------------

import pytest

from credvault.crypto_sym import open_value, seal_value
from credvault.errors import DecryptionFailed
from credvault.models import NONCE_LEN, TAG_LEN

FAST = {"t": 1, "m": 8, "p": 1}


def test_seal_open_roundtrip_ok():
    """Comprueba que un valor sellado se recupere con la misma clave.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    envelope = seal_value("test-key-123", "my-secret-token ñ🔑", FAST)
    assert len(envelope.nonce) == NONCE_LEN and len(envelope.tag) == TAG_LEN
    assert (envelope.time_cost, envelope.memory_cost, envelope.parallelism) == (1, 8, 1)
    assert open_value("test-key-123", envelope) == "my-secret-token ñ🔑"


def test_open_detects_tampering_ciphertext():
    """Verifica que cualquier alteración del ciphertext sea detectada.

    Returns:
        None: La expectativa es DecryptionFailed al abrir el sobre.
    """
    envelope = seal_value("k", "hola mundo", FAST)
    ct = envelope.ciphertext
    tampered = envelope.model_copy(update={"ciphertext": bytes([ct[0] ^ 1]) + ct[1:]})
    with pytest.raises(DecryptionFailed):
        open_value("k", tampered)


def test_open_wrong_key_rejected():
    """Garantiza que una clave distinta no devuelva un texto incorrecto.

    Returns:
        None: Se espera DecryptionFailed durante la verificación.
    """
    envelope = seal_value("k1", "msg", FAST)
    with pytest.raises(DecryptionFailed):
        open_value("k2", envelope)


def test_seal_uses_fresh_nonce_and_salt():
    """Evalúa que salt y nonce no se repitan entre sellados del mismo valor.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    seen = set()
    for _ in range(100):
        envelope = seal_value("k", "x", FAST)
        pair = (envelope.salt, envelope.nonce)
        assert pair not in seen
        seen.add(pair)
