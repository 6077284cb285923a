"""BAC estimation using Widmark-style rise and linear elimination.

Model:
- Rise: BAC = [grams / (body_weight_g * r)] * 100
- r = 0.7 (male), 0.6 (female)
- Elimination: 0.015 BAC percentage points per hour for the whole body,
  scaled by habit level
- Absorption: each drink enters linearly over the time it takes to drink it
  (instant for chugs)

The awards engine only relies on the `BacEstimate` contract; any callable
with the `BacEstimator` signature can replace `estimate`.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from awards_app.drinks import DrinkEvent, MemberProfile

# Distribution ratio (Widmark r)
R_MALE = 0.7
R_FEMALE = 0.6

# Elimination rate (% BAC per hour)
ELIMINATION_PER_HOUR = 0.015

# Regular drinkers clear alcohol faster.
HABIT_ELIMINATION_FACTOR = {
    "low": 0.9,
    "average": 1.0,
    "high": 1.15,
    "chronic": 1.3,
}

# Consumption speeds in ml/minute
CONSUMPTION_RATES = {
    "beer": {"slow": 17, "average": 21, "fast": 25},
    "wine": {"slow": 6, "average": 7, "fast": 8},
    "cocktail": {"slow": 5, "average": 7.5, "fast": 10},
    "spirit": {"slow": 10, "average": 20, "fast": 40},
    "other": {"slow": 10, "average": 15, "fast": 20},
}

SOBER_BAC_THRESHOLD = 0.001
STEP_MS = 15 * 60 * 1000
HORIZON_MS = 48 * 60 * 60 * 1000
MS_PER_HOUR = 60 * 60 * 1000


@dataclass(frozen=True)
class BacEstimate:
    peak_bac: float
    sober_timestamp: Optional[int] = None  # None: not sober within the horizon


BacEstimator = Callable[[Sequence[DrinkEvent], MemberProfile], BacEstimate]


def _body_weight_grams(weight_kg: float) -> float:
    return weight_kg * 1000.0


def _distribution_ratio(gender: str) -> float:
    return R_FEMALE if gender == "female" else R_MALE


def elimination_per_hour(habit_level: str) -> float:
    return ELIMINATION_PER_HOUR * HABIT_ELIMINATION_FACTOR.get(habit_level, 1.0)


def bac_rise_from_grams(grams_alcohol: float, weight_kg: float, gender: str = "male") -> float:
    """Immediate BAC rise (%) from a single dose of alcohol."""
    w_g = _body_weight_grams(weight_kg)
    raw = grams_alcohol / (w_g * _distribution_ratio(gender))
    return raw * 100.0


def consumption_ms(drink: DrinkEvent, drinking_speed: str = "average") -> int:
    """How long the drink takes to finish; chugs count as instant."""
    if drink.is_chug or drink.volume_ml <= 0:
        return 0
    rates = CONSUMPTION_RATES.get(drink.type, CONSUMPTION_RATES["other"])
    ml_per_minute = rates.get(drinking_speed, rates["average"])
    return int(drink.volume_ml / ml_per_minute * 60 * 1000)


def _absorbed_rise(timestamp_ms: int, events: Sequence[DrinkEvent], profile: MemberProfile) -> float:
    """Total BAC rise (%) absorbed by timestamp_ms, before any elimination."""
    total = 0.0
    for drink in events:
        if timestamp_ms < drink.timestamp:
            continue
        rise = bac_rise_from_grams(drink.grams, profile.weight_kg, profile.gender)
        duration = consumption_ms(drink, profile.drinking_speed)
        elapsed_ms = timestamp_ms - drink.timestamp
        total += rise if duration == 0 else rise * min(1.0, elapsed_ms / duration)
    return total


def _sample_times(events: Sequence[DrinkEvent], profile: MemberProfile, end: int) -> List[int]:
    """15-minute grid from the first drink to `end`, plus every absorption end before it."""
    start = min(d.timestamp for d in events)
    times = set(range(start, end + 1, STEP_MS))
    times.update(d.timestamp + consumption_ms(d, profile.drinking_speed) for d in events)
    times.add(end)
    return sorted(t for t in times if start <= t <= end)


def _simulate(events: Sequence[DrinkEvent], profile: MemberProfile, times: Sequence[int]):
    """Yield (timestamp, bac) over sorted times; the body eliminates at one rate for all drinks."""
    elimination = elimination_per_hour(profile.habit_level)
    bac = 0.0
    prev_t: Optional[int] = None
    prev_absorbed = 0.0
    for t in times:
        absorbed = _absorbed_rise(t, events, profile)
        eliminated = 0.0 if prev_t is None else elimination * (t - prev_t) / MS_PER_HOUR
        bac = max(0.0, bac + (absorbed - prev_absorbed) - eliminated)
        prev_t, prev_absorbed = t, absorbed
        yield t, round(bac, 4)


def bac_at_time(timestamp_ms: int, events: Sequence[DrinkEvent], profile: MemberProfile) -> float:
    """BAC (%) at an epoch-ms timestamp from the given drinks."""
    if not events or not profile.weight_kg or timestamp_ms < min(d.timestamp for d in events):
        return 0.0
    bac = 0.0
    for _, bac in _simulate(events, profile, _sample_times(events, profile, timestamp_ms)):
        pass
    return bac


def estimate(events: Sequence[DrinkEvent], profile: MemberProfile) -> BacEstimate:
    """Peak BAC and the time it gets back to (near) zero."""
    if not events or not profile.weight_kg:
        return BacEstimate(peak_bac=0.0)

    last_absorbed = max(d.timestamp + consumption_ms(d, profile.drinking_speed) for d in events)
    times = _sample_times(events, profile, last_absorbed + HORIZON_MS)
    peak = 0.0
    sober_t: Optional[int] = None
    for t, bac in _simulate(events, profile, times):
        peak = max(peak, bac)
        if t >= last_absorbed and bac <= SOBER_BAC_THRESHOLD:
            sober_t = t
            break
    return BacEstimate(peak_bac=peak, sober_timestamp=sober_t)
