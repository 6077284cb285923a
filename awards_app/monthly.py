"""Monthly awards for a group: launch gate, month filter, one pass per award.

Months are 0-indexed (January = 0). Calendar months are taken in local
time (or in `tz` when given).
"""

import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Sequence, Tuple

from awards_app.calculations import BacEstimator, estimate
from awards_app.catalog import AWARD_DEFINITIONS
from awards_app.drinks import DrinkEvent, Member, local_datetime
from awards_app.formatting import normalize_language
from awards_app.metrics import MetricContext
from awards_app.resolver import ComputedAward, resolve_award

logger = logging.getLogger(__name__)

# First month with awards: February 2026.
LAUNCH_MONTH = 1
LAUNCH_YEAR = 2026

Clock = Callable[[], datetime]


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError("month must be between 0 and 11")


def is_before_launch(month: int, year: int) -> bool:
    return (year, month) < (LAUNCH_YEAR, LAUNCH_MONTH)


def filter_by_month(
    events: Sequence[DrinkEvent],
    month: int,
    year: int,
    tz: Optional[tzinfo] = None,
) -> Tuple[DrinkEvent, ...]:
    out = []
    for event in events:
        when = local_datetime(event.timestamp, tz)
        if when.month - 1 == month and when.year == year:
            out.append(event)
    return tuple(out)


def default_period(clock: Optional[Clock] = None, tz: Optional[tzinfo] = None) -> Tuple[int, int]:
    """(month, year) of the previous month, never earlier than launch."""
    now = clock() if clock is not None else datetime.now(tz)
    if now.month == 1:
        month, year = 11, now.year - 1
    else:
        month, year = now.month - 2, now.year
    if is_before_launch(month, year):
        return LAUNCH_MONTH, LAUNCH_YEAR
    return month, year


def compute_monthly_awards(
    members: Sequence[Member],
    month: int,
    year: int,
    language: str = "en",
    estimator: Optional[BacEstimator] = None,
    tz: Optional[tzinfo] = None,
) -> List[ComputedAward]:
    """All awards won in the group for one month, in catalog order."""
    _check_month(month)
    if is_before_launch(month, year):
        logger.debug("No awards before launch: %d-%02d", year, month + 1)
        return []

    language = normalize_language(language)
    ctx = MetricContext(estimator=estimator or estimate, tz=tz)
    monthly = [replace(m, drinks=filter_by_month(m.drinks, month, year, tz)) for m in members]

    awards: List[ComputedAward] = []
    for definition in AWARD_DEFINITIONS:
        award = resolve_award(definition, monthly, month, year, language, ctx)
        if award is None:
            logger.debug("No winner for %s in %d-%02d", definition.id, year, month + 1)
            continue
        awards.append(award)
    logger.debug("Computed %d award(s) for %d member(s), %d-%02d", len(awards), len(members), year, month + 1)
    return awards
