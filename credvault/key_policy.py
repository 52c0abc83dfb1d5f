# --------------------------------------------------------------
# File: key_policy.py
# Description: Evaluación orientativa de la robustez de una clave personalizada.
# --------------------------------------------------------------
"""Utilidades para evaluar claves del vault antes de activarlas.

La política es consultiva: cualquier clave no vacía se acepta, pero las débiles
se registran como aviso para que el operador lo detecte.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from credvault import config

COMMON = {
    "123456",
    "123456789",
    "12345678",
    "qwerty",
    "password",
    "111111",
    "123123",
    "abc123",
    "letmein",
    "admin",
    "welcome",
    "secret",
    "changeme",
    "passw0rd",
    "qwertyuiop",
}

MIN_LENGTH = 16

LOWER = re.compile(r"[a-z]")
UPPER = re.compile(r"[A-Z]")
DIGIT = re.compile(r"\d")
SYMBOL = re.compile(r"[^\w\s]")
GENERATED = re.compile(r"[0-9a-f]{64}")


def class_count(key: str) -> int:
    """Cuenta los grupos de caracteres presentes en la clave."""

    return sum(
        [
            1 if LOWER.search(key) else 0,
            1 if UPPER.search(key) else 0,
            1 if DIGIT.search(key) else 0,
            1 if SYMBOL.search(key) else 0,
        ]
    )


def has_long_repetition(key: str, max_run: int = 3) -> bool:
    """Detecta repeticiones largas de un mismo carácter dentro de la clave."""

    pattern = rf"(.)\1{{{max_run},}}"
    return re.search(pattern, key) is not None


def is_generated_key(key: str) -> bool:
    """Indica si la clave tiene la forma de `generate_strong_key` (64 hex)."""

    return GENERATED.fullmatch(key) is not None


def check_key_strength(key: str) -> Tuple[bool, List[str], int]:
    """Evalúa la clave y devuelve cumplimiento, motivos y puntuación.

    Args:
        key (str): Clave propuesta para el slot del vault.

    Returns:
        Tuple[bool, List[str], int]: Resultado de validación, motivos de aviso y
        puntuación acumulada entre 0 y 100.

    """

    if is_generated_key(key):
        return True, [], 100

    reasons: List[str] = []
    score = 0

    length = len(key)
    if length < MIN_LENGTH:
        reasons.append(f"Longitud mínima {MIN_LENGTH}.")
    else:
        score += min(45, (length - MIN_LENGTH + 1) * 3)

    classes = class_count(key)
    if classes < 3:
        reasons.append("Usa al menos 3 de: minúsculas, mayúsculas, dígitos, símbolos.")
    else:
        score += 30

    if key == config.DEFAULT_KEY:
        reasons.append("Es la clave por defecto, que es pública.")
    else:
        score += 10

    if key.lower() in COMMON:
        reasons.append("Clave demasiado común.")
    else:
        score += 10

    if has_long_repetition(key):
        reasons.append("Evita repeticiones largas del mismo carácter.")
    else:
        score += 5

    score = max(0, min(100, score))
    return not reasons, reasons, score
