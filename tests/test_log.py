# --------------------------------------------------------------
# File: test_log.py
# Description: Pruebas del filtrado de secretos en el logging del paquete.
# --------------------------------------------------------------

import io
import logging

from credvault.log import SecretRedactingFilter, configure_logging, redact


def test_redact_hides_keys_and_long_hex():
    """Asignaciones de clave y cadenas hex largas se sustituyen por [REDACTED]."""
    hex_key = "ab" * 32
    text = redact(f"rotated to {hex_key} with password=hunter2")
    assert hex_key not in text
    assert "hunter2" not in text
    assert "[REDACTED]" in text


def test_filter_sanitizes_formatted_arguments():
    """El filtro aplica el saneado después de interpolar los argumentos."""
    record = logging.LogRecord("credvault", logging.WARNING, __file__, 1, "value %s", ("f" * 40,), None)
    assert SecretRedactingFilter().filter(record)
    assert record.getMessage() == "value [REDACTED]"


def test_configure_logging_is_idempotent():
    """Configurar dos veces no duplica handlers y emite mensajes saneados."""
    logger = configure_logging("INFO")
    try:
        configure_logging("INFO")
        handlers = [h for h in logger.handlers if getattr(h, "_credvault", False)]
        assert len(handlers) == 1
        buffer = io.StringIO()
        handlers[0].setStream(buffer)
        logging.getLogger("credvault.test").info("secret=%s", "s3cr3t")
        assert "s3cr3t" not in buffer.getvalue()
    finally:
        for handler in list(logger.handlers):
            if getattr(handler, "_credvault", False):
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
