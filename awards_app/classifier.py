"""Keyword and type based drink classification for award categories."""

from typing import Iterable, Tuple

from awards_app.drinks import DrinkEvent

# Shots are small spirit pours.
SHOT_MAX_ML = 60.0


def _keywords(*words: str) -> Tuple[str, ...]:
    return tuple(w.lower() for w in words)


RUM_KEYWORDS = _keywords(
    "rhum", "rum", "captain morgan", "havana", "diplomatico", "don papa", "bacardi", "kraken", "plantation",
)
VODKA_KEYWORDS = _keywords(
    "vodka", "grey goose", "absolut", "smirnoff", "belvedere", "stolichnaya", "titos",
)
GIN_KEYWORDS = _keywords("gin", "tanqueray", "hendrick", "bombay", "beefeater", "gordon")
TEQUILA_KEYWORDS = _keywords("tequila", "jose cuervo", "patron", "don julio", "casamigos", "mezcal")
WHISKY_KEYWORDS = _keywords(
    "whisk", "bourbon", "jack daniel", "jameson", "chivas", "nikka", "glenfiddich", "macallan",
    "lagavulin", "johnnie walker", "maker",
)
CHAMPAGNE_KEYWORDS = _keywords(
    "champagne", "moët", "moet", "veuve", "dom pérignon", "dom perignon", "krug", "bollinger", "prosecco",
)


def matches_category(name: str, keywords: Iterable[str]) -> bool:
    """True if the lower-cased name contains any (already lower-cased) keyword."""
    lower = (name or "").lower()
    return any(kw in lower for kw in keywords)


def is_shot(drink: DrinkEvent) -> bool:
    return drink.type == "spirit" and drink.volume_ml <= SHOT_MAX_ML


def is_beer(drink: DrinkEvent) -> bool:
    return drink.type == "beer"


def is_champagne(drink: DrinkEvent) -> bool:
    # Sparkling wine is often logged as plain "wine"; the name decides.
    return matches_category(drink.name, CHAMPAGNE_KEYWORDS)


def is_wine(drink: DrinkEvent) -> bool:
    return drink.type == "wine" and not is_champagne(drink)


def is_chug(drink: DrinkEvent) -> bool:
    return drink.is_chug
