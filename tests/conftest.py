# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar el slot de clave y recargar la configuración.
# --------------------------------------------------------------

import base64
import importlib
import os
from typing import Iterator

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from credvault.key_store import KeyStore
from credvault.legacy import evp_bytes_to_key
from credvault.storage import MemoryKeyStorage
from credvault.vault import Vault

# Costes Argon2id mínimos para que las pruebas sean rápidas.
FAST_KDF = {"t": 1, "m": 8, "p": 1}


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH y recarga credvault.config para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))
    monkeypatch.setenv("VAULT_KDF_TIME_COST", str(FAST_KDF["t"]))
    monkeypatch.setenv("VAULT_KDF_MEMORY_COST", str(FAST_KDF["m"]))
    monkeypatch.setenv("VAULT_KDF_PARALLELISM", str(FAST_KDF["p"]))
    monkeypatch.delenv("VAULT_KEY_SLOT", raising=False)
    monkeypatch.delenv("VAULT_ACCEPT_LEGACY", raising=False)

    import credvault.config as config_module
    import credvault.vault as vault_module

    importlib.reload(config_module)
    vault_module.reset_default_vault()

    yield
    vault_module.reset_default_vault()


@pytest.fixture
def fast_kdf() -> dict:
    """Parámetros Argon2id reducidos para construir vaults adicionales."""
    return dict(FAST_KDF)


@pytest.fixture
def memory_storage() -> MemoryKeyStorage:
    """Almacén en memoria vacío para un KeyStore aislado."""
    return MemoryKeyStorage()


@pytest.fixture
def key_store(memory_storage) -> KeyStore:
    """KeyStore sin clave personalizada sobre almacenamiento en memoria."""
    return KeyStore(memory_storage)


@pytest.fixture
def vault(key_store, fast_kdf) -> Vault:
    """Vault con costes KDF reducidos sobre un KeyStore en memoria."""
    return Vault(key_store, kdf_params=fast_kdf)


@pytest.fixture
def legacy_token():
    """Fábrica de tokens "Salted__" como los que guardaba la versión anterior."""

    def _make(plaintext: str, key: str) -> str:
        salt = os.urandom(8)
        aes_key, iv = evp_bytes_to_key(key.encode("utf-8"), salt)
        padder = padding.PKCS7(128).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = Cipher(algorithms.AES(aes_key), modes.CBC(iv)).encryptor()
        body = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(b"Salted__" + salt + body).decode("ascii")

    return _make
