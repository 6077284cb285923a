"""Display strings for award values, English and French.

Decimals round half up (0.125 -> "0.13"), not half to even.
"""

from decimal import ROUND_HALF_UP, Decimal


def fixed(value: float, digits: int) -> str:
    """Fixed-point text with `digits` decimals, halves rounded away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return format(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def normalize_language(language) -> str:
    """'fr', 'fr-FR', 'FR' -> 'fr'; anything else -> 'en'."""
    if isinstance(language, str) and language.strip().lower().startswith("fr"):
        return "fr"
    return "en"


def liters(value: float, language: str = "en") -> str:
    return f"{fixed(value, 2)}L"


def shots(value: float, language: str = "en") -> str:
    # Same noun in both languages.
    return f"{int(value)} shots"


def party_days(value: float, language: str = "en") -> str:
    return f"{int(value)} {'jours' if language == 'fr' else 'days'}"


def chugs(value: float, language: str = "en") -> str:
    return f"{int(value)} {'cul-sec' if language == 'fr' else 'chugs'}"


def peak_bac(value: float, language: str = "en") -> str:
    """Percent in English; grams per litre of blood in French."""
    if language == "fr":
        return f"{fixed(value * 10, 2)} g/L"
    return f"{fixed(value, 3)}%"


def hours(value: float, language: str = "en") -> str:
    return f"{fixed(value, 1)}h"


def pure_alcohol(value: float, language: str = "en") -> str:
    if value == 0:
        return "0 verre" if language == "fr" else "0 drinks"
    unit = "d'alcool pur" if language == "fr" else "pure alcohol"
    return f"{fixed(value, 0)}g {unit}"
