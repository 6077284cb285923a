"""
Award catalog: the monthly awards, the stat that decides each one and
whether the most or the least of it wins. Declaration order is display order.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

MOST = "most"
LEAST = "least"


@dataclass(frozen=True)
class AwardDefinition:
    id: str
    category: str  # key into metrics.METRICS
    direction: str  # MOST or LEAST
    name: str
    name_fr: str
    description: str
    description_fr: str
    image_url: str

    def localized(self, language: str = "en") -> dict:
        fr = language == "fr"
        return {
            "id": self.id,
            "category": self.category,
            "direction": self.direction,
            "name": self.name_fr if fr else self.name,
            "description": self.description_fr if fr else self.description,
            "image_url": self.image_url,
        }


def _a(aid: str, category: str, name: str, desc: str, desc_fr: str, image: str, direction: str = MOST) -> AwardDefinition:
    return AwardDefinition(
        id=aid,
        category=category,
        direction=direction,
        name=name,
        name_fr=name,
        description=desc,
        description_fr=desc_fr,
        image_url=f"/awards/{image}.png",
    )


AWARD_DEFINITIONS: List[AwardDefinition] = [
    _a("rhumosaur", "most_rum", "Rhumosaur",
       "Player who drank the most rum", "Le joueur ayant bu le plus de rhum", "Rhumosaur"),
    _a("shotausor", "most_shots", "Shotausor",
       "Player who drank the most shots", "Le joueur ayant bu le plus de shots", "Shotausor"),
    _a("vodkatausor", "most_vodka", "Vodkatausor",
       "Player who drank the most vodka", "Le joueur ayant bu le plus de vodka", "Vodkatosaur"),
    _a("partynausor", "most_party_days", "Partynausor",
       "Player who drank on the most different days", "Le joueur ayant bu le plus de jours différents",
       "Partynosaur"),
    _a("vomitosaur", "highest_peak_bac", "Vomitosaur",
       "Player who reached the highest peak BAC", "Le joueur ayant atteint le plus haut pic d'alcool",
       "Vomitosaur"),
    _a("drunkosaur", "longest_drunk_duration", "Drunkosaur",
       "Player who stayed drunk the longest without sobering up",
       "Le joueur ayant fait la plus longue durée sans redevenir sobre", "Drunkosaur"),
    _a("winausor", "most_wine", "Winausor",
       "Player who drank the most wine", "Le joueur ayant bu le plus de vin", "Winosaur"),
    _a("chugginosaur", "most_chugs", "Chugginosaur",
       "Player who chugged the most drinks", "Le joueur ayant fait le plus de cul-sec", "Chuginosaur"),
    _a("champagnosaur", "most_champagne", "Champagnosaur",
       "Player who drank the most champagne", "Le joueur ayant bu le plus de champagne", "Champagnosaur"),
    _a("beerosaur", "most_beer", "Beerosaur",
       "Player who drank the most beer", "Le joueur ayant bu le plus de bière", "Beerosaur"),
    _a("gintosaur", "most_gin", "Gintosaur",
       "Player who drank the most gin", "Le joueur ayant bu le plus de gin", "Gintosaur"),
    _a("sobrosaur", "least_drinks", "Sobrosaur",
       "Player who drank the least (or didn't drink at all)",
       "Le joueur ayant le moins bu / tout joueur n'ayant pas bu", "Sobrosaur", direction=LEAST),
    _a("tequilausor", "most_tequila", "Tequilausor",
       "Player who drank the most tequila", "Le joueur ayant bu le plus de tequila", "Tequilausor"),
    _a("whiskosaur", "most_whisky", "Whiskosaur",
       "Player who drank the most whisky", "Le joueur ayant bu le plus de whisky", "Whiskosaur"),
]

_DEFINITIONS_BY_ID: Dict[str, AwardDefinition] = {d.id: d for d in AWARD_DEFINITIONS}


def get_definition(award_id: str) -> Optional[AwardDefinition]:
    return _DEFINITIONS_BY_ID.get(award_id)


def list_definitions(language: str = "en") -> List[dict]:
    """All awards as dicts in the requested language, for UI listings."""
    return [d.localized(language) for d in AWARD_DEFINITIONS]
