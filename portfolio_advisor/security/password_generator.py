"""
Strong password generation.

One character is drawn from each class (upper, lower, digit, symbol), the
remaining positions are drawn uniformly from the combined alphabet, and the
result is shuffled so the guaranteed picks do not sit at fixed positions.

The random source is injectable: pass a seeded ``random.Random`` for
reproducible output.  The default is ``secrets.SystemRandom()``.
"""

from __future__ import annotations

import logging
import random
import secrets
import string
from typing import Optional

logger = logging.getLogger(__name__)

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
ALPHABET = UPPERCASE + LOWERCASE + DIGITS + SYMBOLS

CHARACTER_CLASSES: tuple[str, ...] = (UPPERCASE, LOWERCASE, DIGITS, SYMBOLS)
MIN_GENERATED_LENGTH = len(CHARACTER_CLASSES)
DEFAULT_LENGTH = 12


def generate_strong_password(
    length: int = DEFAULT_LENGTH,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a password containing every character class.

    Args:
        length: Total length; must be at least 4.
        rng:    Random source (``choice`` and ``shuffle`` are used).

    Returns:
        A ``length``-character password with at least one uppercase letter,
        lowercase letter, digit and symbol.

    Raises:
        ValueError: If ``length`` is below ``MIN_GENERATED_LENGTH``.
    """
    if length < MIN_GENERATED_LENGTH:
        raise ValueError(
            f"length must be >= {MIN_GENERATED_LENGTH} to fit every character "
            f"class, got {length}."
        )

    source = rng if rng is not None else secrets.SystemRandom()

    chars = [source.choice(pool) for pool in CHARACTER_CLASSES]
    chars.extend(source.choice(ALPHABET) for _ in range(length - MIN_GENERATED_LENGTH))
    source.shuffle(chars)

    logger.debug("Generated a %d-character password.", length)
    return "".join(chars)
