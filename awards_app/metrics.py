"""Per-member award metrics and the category -> metric registry.

Every metric takes a member's drinks for the period (already filtered),
their profile and a MetricContext, and returns a plain number. New award
categories are added with `register_metric`.
"""

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Callable, Dict, Iterable, Optional, Sequence

from awards_app import classifier, formatting
from awards_app.calculations import BacEstimator, estimate
from awards_app.drinks import DrinkEvent, MemberProfile, local_datetime
from awards_app.session import session_start, split_sessions

MS_PER_HOUR = 60 * 60 * 1000


@dataclass(frozen=True)
class MetricContext:
    estimator: BacEstimator = estimate
    tz: Optional[tzinfo] = None


ComputeFn = Callable[[Sequence[DrinkEvent], MemberProfile, MetricContext], float]
FormatFn = Callable[[float, str], str]


@dataclass(frozen=True)
class CategoryMetric:
    category: str
    compute: ComputeFn
    display: FormatFn = field(repr=False)


METRICS: Dict[str, CategoryMetric] = {}


def register_metric(category: str, display: FormatFn):
    """Decorator: bind a compute function and its formatter to a category."""

    def decorator(fn: ComputeFn) -> ComputeFn:
        METRICS[category] = CategoryMetric(category=category, compute=fn, display=display)
        return fn

    return decorator


def get_metric(category: str) -> CategoryMetric:
    try:
        return METRICS[category]
    except KeyError:
        raise KeyError(f"No metric registered for award category {category!r}")


# --- Aggregators ---

def volume_by_category(events: Iterable[DrinkEvent], keywords: Sequence[str]) -> float:
    """Liters of drinks whose name matches a keyword list."""
    return sum(e.volume_ml for e in events if classifier.matches_category(e.name, keywords)) / 1000.0


def total_volume_liters(events: Iterable[DrinkEvent], predicate: Callable[[DrinkEvent], bool]) -> float:
    return sum(e.volume_ml for e in events if predicate(e)) / 1000.0


def total_alcohol_grams(events: Iterable[DrinkEvent]) -> float:
    return sum(e.grams for e in events)


def count_matching(events: Iterable[DrinkEvent], predicate: Callable[[DrinkEvent], bool]) -> int:
    return sum(1 for e in events if predicate(e))


def count_unique_days(events: Iterable[DrinkEvent], tz: Optional[tzinfo] = None) -> int:
    """Distinct local calendar days with at least one drink."""
    return len({local_datetime(e.timestamp, tz).date() for e in events})


def peak_bac(events: Sequence[DrinkEvent], profile: MemberProfile, estimator: BacEstimator = estimate) -> float:
    if not events or not profile.weight_kg:
        return 0.0
    return estimator(events, profile).peak_bac


def longest_drunk_duration(
    events: Sequence[DrinkEvent],
    profile: MemberProfile,
    estimator: BacEstimator = estimate,
) -> float:
    """Longest time (hours) from a session's first drink until sober again."""
    if not events or not profile.weight_kg:
        return 0.0

    longest_ms = 0
    for session in split_sessions(events):
        result = estimator(session, profile)
        if result.peak_bac > 0 and result.sober_timestamp is not None:
            longest_ms = max(longest_ms, result.sober_timestamp - session_start(session))
    return longest_ms / MS_PER_HOUR


# --- Registered award categories ---

def _spirit_volume(keywords: Sequence[str]) -> ComputeFn:
    def compute(events, profile, ctx):
        return volume_by_category(events, keywords)

    return compute


register_metric("most_rum", formatting.liters)(_spirit_volume(classifier.RUM_KEYWORDS))
register_metric("most_vodka", formatting.liters)(_spirit_volume(classifier.VODKA_KEYWORDS))
register_metric("most_gin", formatting.liters)(_spirit_volume(classifier.GIN_KEYWORDS))
register_metric("most_tequila", formatting.liters)(_spirit_volume(classifier.TEQUILA_KEYWORDS))
register_metric("most_whisky", formatting.liters)(_spirit_volume(classifier.WHISKY_KEYWORDS))


@register_metric("most_shots", formatting.shots)
def _shots(events, profile, ctx):
    return count_matching(events, classifier.is_shot)


@register_metric("most_party_days", formatting.party_days)
def _party_days(events, profile, ctx):
    return count_unique_days(events, ctx.tz)


@register_metric("highest_peak_bac", formatting.peak_bac)
def _highest_peak_bac(events, profile, ctx):
    return peak_bac(events, profile, ctx.estimator)


@register_metric("longest_drunk_duration", formatting.hours)
def _longest_drunk(events, profile, ctx):
    return longest_drunk_duration(events, profile, ctx.estimator)


@register_metric("most_wine", formatting.liters)
def _wine(events, profile, ctx):
    return total_volume_liters(events, classifier.is_wine)


@register_metric("most_chugs", formatting.chugs)
def _chugs(events, profile, ctx):
    return count_matching(events, classifier.is_chug)


@register_metric("most_champagne", formatting.liters)
def _champagne(events, profile, ctx):
    return total_volume_liters(events, classifier.is_champagne)


@register_metric("most_beer", formatting.liters)
def _beer(events, profile, ctx):
    return total_volume_liters(events, classifier.is_beer)


@register_metric("least_drinks", formatting.pure_alcohol)
def _pure_alcohol(events, profile, ctx):
    return total_alcohol_grams(events)
