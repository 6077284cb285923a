"""
Monthly group awards: drink classification, sessions, per-member metrics,
winner selection and en/fr display values.
Use from project root: python -m awards_app.main snapshot.json
"""

from awards_app.drinks import DrinkEvent, Member, MemberProfile
from awards_app.calculations import BacEstimate, estimate
from awards_app.catalog import AWARD_DEFINITIONS, AwardDefinition, get_definition, list_definitions
from awards_app.metrics import METRICS, MetricContext, register_metric
from awards_app.resolver import ComputedAward, resolve_award
from awards_app.monthly import compute_monthly_awards, default_period
from awards_app.award_store import WonAward, claim_award

__all__ = [
    "DrinkEvent",
    "Member",
    "MemberProfile",
    "BacEstimate",
    "estimate",
    "AWARD_DEFINITIONS",
    "AwardDefinition",
    "get_definition",
    "list_definitions",
    "METRICS",
    "MetricContext",
    "register_metric",
    "ComputedAward",
    "resolve_award",
    "compute_monthly_awards",
    "default_period",
    "WonAward",
    "claim_award",
]
