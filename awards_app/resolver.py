"""Pick the winner of one award among a group's members.

Rules:
- "most" awards go to the strictly largest value, and only if it is > 0.
- "least" awards go to the strictly smallest value, and are skipped when
  the whole group sums to zero (nobody drank at all).
- Ties keep the first member in list order.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from awards_app.catalog import LEAST, AwardDefinition
from awards_app.drinks import Member
from awards_app.metrics import MetricContext, get_metric


@dataclass(frozen=True)
class Standing:
    uid: str
    value: float
    display: str


@dataclass(frozen=True)
class ComputedAward:
    award_id: str
    recipient_uid: str
    recipient_name: str
    recipient_photo: str
    value: str
    month: int  # 0-indexed
    year: int

    def to_dict(self) -> dict:
        return {
            "awardId": self.award_id,
            "recipientUid": self.recipient_uid,
            "recipientName": self.recipient_name,
            "recipientPhoto": self.recipient_photo,
            "value": self.value,
            "month": self.month,
            "year": self.year,
        }

    @classmethod
    def from_dict(cls, raw) -> "ComputedAward":
        if not isinstance(raw, dict):
            raise ValueError("award must be an object")
        try:
            return cls(
                award_id=str(raw["awardId"]),
                recipient_uid=str(raw.get("recipientUid", "")),
                recipient_name=str(raw.get("recipientName", "")),
                recipient_photo=str(raw.get("recipientPhoto", "")),
                value=str(raw.get("value", "")),
                month=int(raw["month"]),
                year=int(raw["year"]),
            )
        except (KeyError, TypeError, ValueError):
            raise ValueError("award needs awardId, month and year")


def member_standings(
    definition: AwardDefinition,
    members: Sequence[Member],
    language: str = "en",
    context: Optional[MetricContext] = None,
) -> List[Standing]:
    """Each member's value for the award's stat, in member order."""
    ctx = context or MetricContext()
    metric = get_metric(definition.category)
    standings = []
    for member in members:
        value = metric.compute(member.drinks, member.profile, ctx)
        standings.append(Standing(uid=member.uid, value=value, display=metric.display(value, language)))
    return standings


def _pick_winner(direction: str, standings: Sequence[Standing]) -> Optional[int]:
    best: Optional[int] = None
    if direction == LEAST:
        if sum(s.value for s in standings) == 0:
            return None
        for i, s in enumerate(standings):
            if best is None or s.value < standings[best].value:
                best = i
        return best

    for i, s in enumerate(standings):
        if s.value > 0 and (best is None or s.value > standings[best].value):
            best = i
    return best


def resolve_award(
    definition: AwardDefinition,
    members: Sequence[Member],
    month: int,
    year: int,
    language: str = "en",
    context: Optional[MetricContext] = None,
) -> Optional[ComputedAward]:
    """The award for this period, or None when nobody qualifies."""
    standings = member_standings(definition, members, language, context)
    winner = _pick_winner(definition.direction, standings)
    if winner is None:
        return None

    member = members[winner]
    return ComputedAward(
        award_id=definition.id,
        recipient_uid=member.uid,
        recipient_name=member.display_name,
        recipient_photo=member.photo_url,
        value=standings[winner].display,
        month=month,
        year=year,
    )
