"""Tests for drink classification, sessions, metrics and monthly award selection."""
from datetime import datetime

import pytest

from awards_app import formatting
from awards_app.calculations import BacEstimate
from awards_app.catalog import AWARD_DEFINITIONS, LEAST, get_definition, list_definitions
from awards_app.classifier import (
    CHAMPAGNE_KEYWORDS,
    RUM_KEYWORDS,
    is_champagne,
    is_shot,
    is_wine,
    matches_category,
)
from awards_app.drinks import DrinkEvent, Member, MemberProfile
from awards_app.metrics import (
    METRICS,
    MetricContext,
    count_unique_days,
    longest_drunk_duration,
    peak_bac,
    register_metric,
    total_alcohol_grams,
    volume_by_category,
)
from awards_app.monthly import (
    LAUNCH_MONTH,
    LAUNCH_YEAR,
    compute_monthly_awards,
    default_period,
    filter_by_month,
    is_before_launch,
)
from awards_app.resolver import member_standings, resolve_award
from awards_app.session import SESSION_GAP_MS, split_sessions

HOUR_MS = 60 * 60 * 1000
MARCH = 2  # 0-indexed


def ts(year, month, day, hour=20, minute=0):
    """Epoch ms for a local wall-clock time (month is 1-12 here)."""
    return int(datetime(year, month, day, hour, minute).timestamp() * 1000)


def drink(name="Heineken", type="beer", volume_ml=330, abv=5.0, t=None, chug=False):
    return DrinkEvent(
        name=name,
        type=type,
        volume_ml=volume_ml,
        abv=abv,
        timestamp=ts(2026, 3, 14) if t is None else t,
        is_chug=chug,
    )


def member(uid, drinks=(), weight_kg=80.0):
    return Member(
        profile=MemberProfile(uid=uid, display_name=uid.upper(), photo_url=f"/{uid}.png", weight_kg=weight_kg),
        drinks=tuple(drinks),
    )


def fake_estimator(peak=0.05, sober_after_ms=2 * HOUR_MS):
    def estimator(events, profile):
        last = max(e.timestamp for e in events)
        return BacEstimate(peak_bac=peak, sober_timestamp=last + sober_after_ms)

    return estimator


# --- classifier ---

def test_keyword_match_is_case_insensitive():
    assert matches_category("BACARDI Carta Blanca", RUM_KEYWORDS)
    assert matches_category("Rhum arrangé", RUM_KEYWORDS)
    assert not matches_category("Heineken", RUM_KEYWORDS)
    assert not matches_category("", RUM_KEYWORDS)


def test_keyword_tables_are_lower_case():
    assert all(kw == kw.lower() for kw in CHAMPAGNE_KEYWORDS)


def test_shot_is_small_spirit():
    assert is_shot(drink("Tequila", "spirit", volume_ml=40, abv=38))
    assert is_shot(drink("Tequila", "spirit", volume_ml=60, abv=38))
    assert not is_shot(drink("Tequila", "spirit", volume_ml=61, abv=38))
    assert not is_shot(drink("Jäger bomb", "cocktail", volume_ml=40, abv=20))


def test_champagne_is_never_wine():
    moet = drink("Moët Chandon", "wine", volume_ml=125, abv=12)
    assert is_champagne(moet)
    assert not is_wine(moet)
    # The name decides even when the declared type is something else.
    assert is_champagne(drink("Prosecco spritz", "cocktail", volume_ml=200, abv=8))
    assert is_wine(drink("Bordeaux", "wine", volume_ml=125, abv=13))


# --- sessions ---

def test_split_sessions_empty():
    assert split_sessions([]) == []


def test_split_sessions_gap_boundary():
    t0 = ts(2026, 3, 14)
    same = split_sessions([drink(t=t0), drink(t=t0 + SESSION_GAP_MS)])
    assert len(same) == 1
    split = split_sessions([drink(t=t0), drink(t=t0 + SESSION_GAP_MS + 1)])
    assert len(split) == 2


def test_split_sessions_sorts_input():
    t0 = ts(2026, 3, 14)
    events = [drink(t=t0 + 20 * HOUR_MS), drink(t=t0 + HOUR_MS), drink(t=t0)]
    sessions = split_sessions(events)
    assert [[e.timestamp for e in s] for s in sessions] == [
        [t0, t0 + HOUR_MS],
        [t0 + 20 * HOUR_MS],
    ]


# --- metrics ---

def test_total_alcohol_grams():
    assert total_alcohol_grams([drink(volume_ml=330, abv=5)]) == pytest.approx(13.0185)
    assert total_alcohol_grams([]) == 0


def test_volume_by_category_in_liters():
    events = [drink("Captain Morgan", "spirit", volume_ml=40, abv=35), drink("Kraken", "spirit", volume_ml=60, abv=40)]
    assert volume_by_category(events, RUM_KEYWORDS) == pytest.approx(0.1)


def test_count_unique_days():
    events = [
        drink(t=ts(2026, 3, 14, 20)),
        drink(t=ts(2026, 3, 14, 23)),
        drink(t=ts(2026, 3, 15, 1)),
    ]
    assert count_unique_days(events) == 2
    assert count_unique_days([]) == 0


def test_bac_metrics_need_weight_and_drinks():
    no_weight = MemberProfile(uid="a")
    assert peak_bac([drink()], no_weight) == 0
    assert longest_drunk_duration([drink()], no_weight) == 0
    assert peak_bac([], MemberProfile(uid="a", weight_kg=70)) == 0


def test_longest_drunk_duration_per_session():
    t0 = ts(2026, 3, 14)
    events = [drink(t=t0), drink(t=t0 + HOUR_MS), drink(t=t0 + 20 * HOUR_MS)]
    profile = MemberProfile(uid="a", weight_kg=70)
    # First session: 1h of drinking + 2h to sober up.
    assert longest_drunk_duration(events, profile, fake_estimator()) == pytest.approx(3.0)


def test_longest_drunk_duration_skips_unfinished_sessions():
    profile = MemberProfile(uid="a", weight_kg=70)

    def never_sober(events, p):
        return BacEstimate(peak_bac=0.3, sober_timestamp=None)

    assert longest_drunk_duration([drink()], profile, never_sober) == 0
    assert longest_drunk_duration([drink()], profile, fake_estimator(peak=0.0)) == 0


def test_every_award_has_a_metric():
    assert {d.category for d in AWARD_DEFINITIONS} <= set(METRICS)


def test_register_metric_adds_category():
    @register_metric("most_water", formatting.liters)
    def _water(events, profile, ctx):
        return 1.5

    try:
        assert METRICS["most_water"].compute([], None, MetricContext()) == 1.5
        assert METRICS["most_water"].display(1.5, "en") == "1.50L"
    finally:
        METRICS.pop("most_water")


# --- formatting ---

@pytest.mark.parametrize(
    "fn, value, en, fr",
    [
        (formatting.liters, 0.99, "0.99L", "0.99L"),
        (formatting.shots, 4, "4 shots", "4 shots"),
        (formatting.party_days, 3, "3 days", "3 jours"),
        (formatting.chugs, 2, "2 chugs", "2 cul-sec"),
        (formatting.peak_bac, 0.0512, "0.051%", "0.51 g/L"),
        (formatting.hours, 5.24, "5.2h", "5.2h"),
        (formatting.pure_alcohol, 0, "0 drinks", "0 verre"),
        (formatting.pure_alcohol, 39.06, "39g pure alcohol", "39g d'alcool pur"),
        (formatting.liters, 0.125, "0.13L", "0.13L"),
        (formatting.hours, 2.25, "2.3h", "2.3h"),
        (formatting.pure_alcohol, 12.5, "13g pure alcohol", "13g d'alcool pur"),
        (formatting.peak_bac, 0.0125, "0.013%", "0.13 g/L"),
    ],
)
def test_display_values(fn, value, en, fr):
    assert fn(value, "en") == en
    assert fn(value, "fr") == fr


def test_normalize_language():
    assert formatting.normalize_language("fr-FR") == "fr"
    assert formatting.normalize_language("de") == "en"
    assert formatting.normalize_language(None) == "en"


# --- catalog ---

def test_catalog_directions():
    assert get_definition("sobrosaur").direction == LEAST
    assert [d.id for d in AWARD_DEFINITIONS if d.direction == LEAST] == ["sobrosaur"]
    assert get_definition("nope") is None


def test_list_definitions_localized():
    fr = {d["id"]: d for d in list_definitions("fr")}
    assert fr["beerosaur"]["description"] == "Le joueur ayant bu le plus de bière"
    assert fr["beerosaur"]["image_url"] == "/awards/Beerosaur.png"


# --- resolver ---

def test_most_award_needs_positive_value():
    beer = get_definition("beerosaur")
    members = [member("a"), member("b")]
    assert resolve_award(beer, members, MARCH, 2026) is None


def test_most_award_goes_to_strictly_largest():
    beer = get_definition("beerosaur")
    members = [member("a", [drink()]), member("b", [drink(), drink()])]
    award = resolve_award(beer, members, MARCH, 2026)
    assert award.recipient_uid == "b"
    assert award.value == "0.66L"


def test_ties_go_to_first_member():
    beer = get_definition("beerosaur")
    members = [member("a", [drink()]), member("b", [drink()]), member("c")]
    assert resolve_award(beer, members, MARCH, 2026).recipient_uid == "a"
    assert resolve_award(beer, list(reversed(members)), MARCH, 2026).recipient_uid == "b"


def test_least_award_smallest_value_wins():
    sober = get_definition("sobrosaur")
    members = [member("a", [drink(), drink()]), member("b", [drink()])]
    award = resolve_award(sober, members, MARCH, 2026, language="fr")
    assert award.recipient_uid == "b"
    assert award.value == "13g d'alcool pur"


def test_least_award_skipped_when_group_total_is_zero():
    sober = get_definition("sobrosaur")
    members = [member("a"), member("b", [drink(abv=0.0)])]
    assert resolve_award(sober, members, MARCH, 2026) is None
    assert resolve_award(sober, [], MARCH, 2026) is None


def test_member_standings_keep_member_order():
    beer = get_definition("beerosaur")
    standings = member_standings(beer, [member("b", [drink()]), member("a")])
    assert [(s.uid, s.display) for s in standings] == [("b", "0.33L"), ("a", "0.00L")]


# --- monthly orchestration ---

def test_launch_gate():
    assert is_before_launch(0, 2026)
    assert is_before_launch(11, 2025)
    assert not is_before_launch(LAUNCH_MONTH, LAUNCH_YEAR)


@pytest.mark.parametrize("month, year", [(0, 2026), (11, 2025), (5, 2020)])
def test_no_awards_before_launch(month, year):
    members = [member("a", [drink(t=ts(year, month + 1, 10))]), member("b")]
    assert compute_monthly_awards(members, month, year) == []


def test_invalid_month_rejected():
    with pytest.raises(ValueError):
        compute_monthly_awards([], 12, 2026)


def test_filter_by_month():
    events = [drink(t=ts(2026, 2, 28, 23)), drink(t=ts(2026, 3, 1, 0, 30)), drink(t=ts(2027, 3, 5))]
    kept = filter_by_month(events, MARCH, 2026)
    assert [e.timestamp for e in kept] == [ts(2026, 3, 1, 0, 30)]


def test_three_beers_vs_nothing():
    t0 = ts(2026, 3, 14, 20)
    a = member("a", [drink(t=t0), drink(t=t0 + HOUR_MS // 2), drink(t=t0 + HOUR_MS)])
    b = member("b")
    awards = {aw.award_id: aw for aw in compute_monthly_awards([a, b], MARCH, 2026)}

    assert awards["beerosaur"].recipient_uid == "a"
    assert awards["beerosaur"].value == "0.99L"
    assert awards["beerosaur"].recipient_name == "A"
    assert awards["sobrosaur"].recipient_uid == "b"
    assert awards["sobrosaur"].value == "0 drinks"
    assert awards["partynausor"].value == "1 days"
    assert awards["vomitosaur"].recipient_uid == "a"
    assert awards["drunkosaur"].recipient_uid == "a"
    assert "rhumosaur" not in awards
    assert all(aw.month == MARCH and aw.year == 2026 for aw in awards.values())


def test_awards_follow_catalog_order():
    t0 = ts(2026, 3, 14, 20)
    a = member("a", [drink(t=t0), drink("Bacardi", "spirit", 40, 40, t=t0), drink(chug=True, t=t0)])
    b = member("b", [drink("Moët Chandon", "wine", 125, 12, t=t0)])
    ids = [aw.award_id for aw in compute_monthly_awards([a, b], MARCH, 2026)]
    order = [d.id for d in AWARD_DEFINITIONS]
    assert ids == sorted(ids, key=order.index)
    assert "champagnosaur" in ids
    assert "winausor" not in ids


def test_only_target_month_counts():
    a = member("a", [drink(t=ts(2026, 2, 20)) for _ in range(5)])
    b = member("b", [drink(t=ts(2026, 3, 20))])
    awards = {aw.award_id: aw for aw in compute_monthly_awards([a, b], MARCH, 2026)}
    assert awards["beerosaur"].recipient_uid == "b"
    assert awards["sobrosaur"].recipient_uid == "a"


def test_french_values_and_injected_estimator():
    t0 = ts(2026, 3, 14, 20)
    a = member("a", [drink(t=t0), drink(t=t0 + HOUR_MS)])
    b = member("b", [drink(t=t0)])
    awards = {
        aw.award_id: aw
        for aw in compute_monthly_awards([a, b], MARCH, 2026, language="fr", estimator=fake_estimator(peak=0.08))
    }
    # Equal peaks: first member keeps it.
    assert awards["vomitosaur"].recipient_uid == "a"
    assert awards["vomitosaur"].value == "0.80 g/L"
    assert awards["drunkosaur"].value == "3.0h"
    assert awards["partynausor"].value == "1 jours"


def test_compute_is_idempotent():
    t0 = ts(2026, 3, 14, 20)
    members = [member("a", [drink(t=t0)]), member("b", [drink("Gin tonic", "cocktail", 200, 10, t=t0)])]
    assert compute_monthly_awards(members, MARCH, 2026) == compute_monthly_awards(members, MARCH, 2026)


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2026, 4, 2), (2, 2026)),
        (datetime(2027, 1, 15), (11, 2026)),
        (datetime(2026, 2, 10), (LAUNCH_MONTH, LAUNCH_YEAR)),
        (datetime(2025, 6, 1), (LAUNCH_MONTH, LAUNCH_YEAR)),
    ],
)
def test_default_period_uses_clock(now, expected):
    assert default_period(clock=lambda: now) == expected


# --- parsing ---

def test_member_from_dict_fallbacks():
    m = Member.from_dict({
        "uid": "u1",
        "profile": {"displayName": "Jo", "photoURL": "/p.png", "customPhotoURL": "/c.png", "weightKg": 0},
        "drinks": [{"name": "Leffe", "type": "beer", "volumeMl": 250, "abv": 6.6, "timestamp": 1, "isChug": True}],
    })
    assert m.display_name == "Jo"
    assert m.photo_url == "/c.png"
    assert m.profile.weight_kg is None
    assert m.drinks[0].is_chug
    assert m.drinks[0].volume_ml == 250


def test_member_from_dict_defaults():
    m = Member.from_dict({"uid": "u2", "weightKg": 70, "drinks": [{"timestamp": 5, "type": "mead"}]})
    assert m.display_name == "Anonymous"
    assert m.profile.weight_kg == 70
    assert m.drinks[0].type == "other"


def test_drink_without_timestamp_rejected():
    with pytest.raises(ValueError):
        DrinkEvent.from_dict({"name": "Leffe"})


@pytest.mark.parametrize(
    "raw",
    [
        {"timestamp": 10**20},
        {"timestamp": -1},
        {"timestamp": float("inf")},
        {"timestamp": 5, "volumeMl": "nan"},
        {"timestamp": 5, "abv": float("inf")},
    ],
)
def test_drink_with_unusable_numbers_rejected(raw):
    with pytest.raises(ValueError):
        DrinkEvent.from_dict(raw)


def test_profile_with_infinite_weight_rejected():
    with pytest.raises(ValueError):
        MemberProfile.from_dict({"uid": "u1", "weightKg": "inf"})
