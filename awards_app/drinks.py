"""Drink events and member profiles consumed by the awards engine.

Events arrive from the drink log already validated; this module only
models them and parses the upstream wire format (camelCase keys).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional, Tuple

# Ethanol density (g/mL) for volume x ABV -> grams.
ETHANOL_DENSITY = 0.789

DRINK_TYPES = ("beer", "wine", "spirit", "cocktail", "other")
GENDERS = ("male", "female")
DRINKING_SPEEDS = ("slow", "average", "fast")
HABIT_LEVELS = ("low", "average", "high", "chronic")

# Timestamps datetime can turn into a calendar date in any zone.
MIN_TIMESTAMP_MS = 0
MAX_TIMESTAMP_MS = int(datetime(9999, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)


def grams_from_volume_abv(volume_ml: float, abv_percent: float) -> float:
    """Convert millilitres and ABV (percent, e.g. 5.0) to grams of ethanol."""
    return volume_ml * (abv_percent / 100.0) * ETHANOL_DENSITY


def local_datetime(timestamp_ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Calendar view of an epoch-ms timestamp (system local time when tz is None)."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz)


def _float(value: Any, default: float) -> float:
    """Parse a number; missing or unparsable gives the default, NaN or infinity is rejected."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(parsed):
        raise ValueError(f"{value!r} is not a finite number")
    return parsed


def _choice(value: Any, allowed: Tuple[str, ...], default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in allowed:
        return value.strip().lower()
    return default


@dataclass(frozen=True)
class DrinkEvent:
    """A single logged drink."""

    name: str
    type: str
    volume_ml: float
    abv: float  # percent, e.g. 5.0
    timestamp: int  # epoch ms
    is_chug: bool = False

    @property
    def grams(self) -> float:
        return grams_from_volume_abv(self.volume_ml, self.abv)

    @classmethod
    def from_dict(cls, raw: Any) -> "DrinkEvent":
        if not isinstance(raw, dict):
            raise ValueError("drink must be an object")
        try:
            timestamp = int(raw["timestamp"])
        except (KeyError, TypeError, ValueError, OverflowError):
            raise ValueError("drink timestamp must be epoch milliseconds")
        if not MIN_TIMESTAMP_MS <= timestamp <= MAX_TIMESTAMP_MS:
            raise ValueError("drink timestamp is out of range")
        return cls(
            name=str(raw.get("name") or ""),
            type=_choice(raw.get("type"), DRINK_TYPES, "other"),
            volume_ml=_float(raw.get("volumeMl"), 0.0),
            abv=_float(raw.get("abv"), 0.0),
            timestamp=timestamp,
            is_chug=bool(raw.get("isChug", False)),
        )


@dataclass(frozen=True)
class MemberProfile:
    """The slice of a user profile the awards need (identity + BAC inputs)."""

    uid: str
    display_name: str = "Anonymous"
    photo_url: str = ""
    weight_kg: Optional[float] = None
    gender: str = "male"
    drinking_speed: str = "average"
    habit_level: str = "average"

    @classmethod
    def from_dict(cls, raw: Any, uid: Optional[str] = None) -> "MemberProfile":
        if not isinstance(raw, dict):
            raise ValueError("profile must be an object")
        uid = uid or raw.get("uid")
        if not uid:
            raise ValueError("profile uid is required")
        weight = _float(raw.get("weightKg"), 0.0)
        return cls(
            uid=str(uid),
            display_name=raw.get("username") or raw.get("displayName") or "Anonymous",
            photo_url=raw.get("customPhotoURL") or raw.get("photoURL") or "",
            weight_kg=weight if weight > 0 else None,
            gender=_choice(raw.get("gender"), GENDERS, "male"),
            drinking_speed=_choice(raw.get("drinkingSpeed"), DRINKING_SPEEDS, "average"),
            habit_level=_choice(raw.get("habitLevel"), HABIT_LEVELS, "average"),
        )


@dataclass(frozen=True)
class Member:
    """One group member: profile plus drink history as fetched upstream."""

    profile: MemberProfile
    drinks: Tuple[DrinkEvent, ...] = field(default_factory=tuple)

    @property
    def uid(self) -> str:
        return self.profile.uid

    @property
    def display_name(self) -> str:
        return self.profile.display_name

    @property
    def photo_url(self) -> str:
        return self.profile.photo_url

    @classmethod
    def from_dict(cls, raw: Any) -> "Member":
        """Parse `{"uid", "profile": {...}, "drinks": [...]}`.

        The profile keys may also sit at the top level next to `drinks`.
        """
        if not isinstance(raw, dict):
            raise ValueError("member must be an object")
        profile_raw = raw.get("profile")
        if not isinstance(profile_raw, dict):
            profile_raw = raw
        profile = MemberProfile.from_dict(profile_raw, uid=raw.get("uid"))
        drinks_raw = raw.get("drinks") or []
        if not isinstance(drinks_raw, list):
            raise ValueError("drinks must be a list")
        return cls(profile=profile, drinks=tuple(DrinkEvent.from_dict(d) for d in drinks_raw))
