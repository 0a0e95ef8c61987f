# core/password_utils.py
from __future__ import annotations
import secrets
from dataclasses import dataclass
from typing import Callable, List

from loguru import logger

UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.?/"

# Characters often confused visually
AMBIGUOUS = frozenset(["O", "0", "I", "l", "1", "|", "`", "'", '"', "\\"])

MIN_LENGTH = 4


class ConfigError(ValueError):
    """Raised when a GenerationConfig cannot produce a password."""


@dataclass(frozen=True)
class GenerationConfig:
    length: int = 16
    include_upper: bool = True
    include_lower: bool = True
    include_digits: bool = True
    include_symbols: bool = True
    exclude_ambiguous: bool = True


# --------- Randomness ---------
def rand_int(max_exclusive: int) -> int:
    """
    Crypto-safe random int in [0, max_exclusive).
    32 random bits reduced modulo max: slight bias when max does not divide 2**32.
    """
    if max_exclusive <= 0:
        raise ValueError("max_exclusive must be positive")
    return secrets.randbits(32) % max_exclusive

def choice(chars: str, rand: Callable[[int], int] = rand_int) -> str:
    return chars[rand(len(chars))]

def shuffle(items: list, rand: Callable[[int], int] = rand_int) -> list:
    # Fisher-Yates, last index down to 1
    for i in range(len(items) - 1, 0, -1):
        j = rand(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


# --------- Character classes ---------
def remove_ambiguous(chars: str) -> str:
    return "".join(c for c in chars if c not in AMBIGUOUS)

def build_character_classes(config: GenerationConfig) -> List[str]:
    """
    Returns enabled classes in category order (upper, lower, digits, symbols),
    each filtered on its own when exclude_ambiguous is set.
    """
    enabled = [
        (config.include_upper, UPPER),
        (config.include_lower, LOWER),
        (config.include_digits, DIGITS),
        (config.include_symbols, SYMBOLS),
    ]
    classes: List[str] = []
    for on, chars in enabled:
        if not on:
            continue
        classes.append(remove_ambiguous(chars) if config.exclude_ambiguous else chars)
    return classes


# --------- Generation ---------
def validate(config: GenerationConfig, classes: List[str]) -> None:
    if config.length < MIN_LENGTH:
        raise ConfigError(f"length below minimum of {MIN_LENGTH}")
    if not classes:
        raise ConfigError("at least one character category must be enabled")
    if config.length < len(classes):
        raise ConfigError(
            f"length too small: minimum = number of enabled categories ({len(classes)})"
        )

def generate_password(config: GenerationConfig, rand: Callable[[int], int] = rand_int) -> str:
    """
    Generate a password of config.length characters with at least one
    character from every enabled class.
    """
    classes = build_character_classes(config)
    validate(config, classes)

    # 1) one char per category
    chars = [choice(cls, rand) for cls in classes]

    # 2) fill from the combined alphabet
    alphabet = "".join(classes)
    while len(chars) < config.length:
        chars.append(choice(alphabet, rand))

    # 3) remove positional bias of step 1
    shuffle(chars, rand)
    logger.debug(
        "Generated password: length={} categories={} alphabet={}",
        config.length, len(classes), len(alphabet),
    )
    return "".join(chars)

def generate_many(config: GenerationConfig, count: int, rand: Callable[[int], int] = rand_int) -> List[str]:
    if count < 1:
        raise ConfigError("count must be at least 1")
    return [generate_password(config, rand) for _ in range(count)]
