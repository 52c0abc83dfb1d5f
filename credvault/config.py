# --------------------------------------------------------------
# File: config.py
# Description: Parámetros del vault leídos del entorno y de un fichero .env.
# --------------------------------------------------------------
import os
from dotenv import load_dotenv
load_dotenv()

# Clave por defecto compilada en el código: es pública, NO protege nada.
DEFAULT_KEY = "mc-vault-2026-default-key"

STORAGE_PATH = os.getenv("STORAGE_PATH", "./_data")
KEY_SLOT = os.getenv("VAULT_KEY_SLOT", "mc-encryption-key")
KEY_SLOT_PATH = os.path.join(STORAGE_PATH, "keyslot.json")

# Argon2id para derivar la clave de cada token (mínimos OWASP por defecto).
KDF_PARAMS = {
    "t": int(os.getenv("VAULT_KDF_TIME_COST", "2")),
    "m": int(os.getenv("VAULT_KDF_MEMORY_COST", "19456")),
    "p": int(os.getenv("VAULT_KDF_PARALLELISM", "1")),
}

ACCEPT_LEGACY_TOKENS = os.getenv("VAULT_ACCEPT_LEGACY", "1").lower() not in ("0", "false", "no")
LOG_LEVEL = os.getenv("VAULT_LOG_LEVEL", "WARNING").upper()
