# --------------------------------------------------------------
# File: log.py
# Description: Configuración de logging con filtrado de material secreto.
# --------------------------------------------------------------
"""Logging del paquete `credvault` sin filtrar claves ni textos en claro."""

from __future__ import annotations

import logging
import re
import sys
from typing import List, Optional, Pattern

from credvault import config

_SENSITIVE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"(?i)(key|secret|token|password|passwd)\s*[=:]\s*[\"']?[^\s\"']+[\"']?"),
    re.compile(r"(?i)\b[a-f0-9]{32,}\b"),
    re.compile(r"[A-Za-z0-9+/_-]{40,}={0,2}"),
]

_REDACTED = "[REDACTED]"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def redact(message: str) -> str:
    """Sustituye cualquier fragmento con aspecto de secreto por `[REDACTED]`."""

    for pattern in _SENSITIVE_PATTERNS:
        message = pattern.sub(_REDACTED, message)
    return message


class SecretRedactingFilter(logging.Filter):
    """Filtro que sanea mensaje y argumentos antes de emitir el registro."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        return True


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Instala un handler de consola en el logger `credvault`.

    Args:
        level (Optional[str]): Nivel de log; por defecto `config.LOG_LEVEL`.

    Returns:
        logging.Logger: Logger raíz del paquete ya configurado.

    """

    logger = logging.getLogger("credvault")
    logger.setLevel(level or config.LOG_LEVEL)
    if not any(getattr(h, "_credvault", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(SecretRedactingFilter())
        handler._credvault = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
