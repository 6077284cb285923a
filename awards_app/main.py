"""
Monthly awards CLI. Run from project root:
    python -m awards_app.main snapshot.json --month 2 --year 2026 --lang fr
The snapshot is a JSON object with a "members" list (profile + drinks per member).
Without --month/--year the previous calendar month is used.
"""

import argparse
import json
import logging
import sys

from awards_app.catalog import get_definition
from awards_app.drinks import Member
from awards_app.monthly import compute_monthly_awards, default_period


def load_members(path: str):
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    raw_members = data.get("members", []) if isinstance(data, dict) else data
    if not isinstance(raw_members, list):
        raise ValueError("members must be a list")
    return [Member.from_dict(m) for m in raw_members]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute a group's monthly drinking awards")
    parser.add_argument("snapshot", help="JSON file with the group's members and drinks")
    parser.add_argument("--month", type=int, help="Month 1-12 (default: previous month)")
    parser.add_argument("--year", type=int, help="Year (default: year of previous month)")
    parser.add_argument("--lang", default="en", choices=["en", "fr"], help="Display language")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        members = load_members(args.snapshot)
    except (OSError, ValueError) as exc:
        print(f"Could not read snapshot: {exc}", file=sys.stderr)
        return 1

    month, year = default_period()
    if args.month is not None:
        if not 1 <= args.month <= 12:
            print("--month must be between 1 and 12", file=sys.stderr)
            return 1
        month = args.month - 1
    if args.year is not None:
        year = args.year

    awards = compute_monthly_awards(members, month, year, language=args.lang)
    print(f"Awards for {year}-{month + 1:02d}: {len(awards)}")
    for award in awards:
        definition = get_definition(award.award_id)
        name = definition.localized(args.lang)["name"] if definition else award.award_id
        print(f"  {name}: {award.recipient_name} ({award.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
