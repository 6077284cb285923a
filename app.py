"""Monthly awards Flask app.

Run from project root:
    python app.py
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from flask import Flask, current_app, jsonify, request

from awards_app.award_store import claim_award, init_db as init_awards_db, list_won_awards
from awards_app.catalog import list_definitions
from awards_app.drinks import Member
from awards_app.formatting import normalize_language
from awards_app.monthly import LAUNCH_MONTH, LAUNCH_YEAR, compute_monthly_awards, default_period
from awards_app.resolver import ComputedAward

logger = logging.getLogger(__name__)

app = Flask(__name__)

MAX_MEMBERS = 200
DEFAULT_AWARDS_DB_PATH = str(Path("instance") / "awards.db")


def _awards_db_path() -> str:
    return os.environ.get("AWARDS_DB_PATH", DEFAULT_AWARDS_DB_PATH)


def _ensure_awards_db() -> None:
    db_path = Path(_awards_db_path())
    db_path.parent.mkdir(parents=True, exist_ok=True)
    init_awards_db(str(db_path))


def _now() -> datetime:
    clock = current_app.config.get("AWARDS_CLOCK")
    return clock() if callable(clock) else datetime.now()


def _parse_int(value: Any) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_members(raw: Any) -> list[Member]:
    if not isinstance(raw, list):
        raise ValueError("members must be a list")
    if len(raw) > MAX_MEMBERS:
        raise ValueError(f"at most {MAX_MEMBERS} members per request")
    return [Member.from_dict(m) for m in raw]


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _bad_request(message: str):
    return jsonify({"error": message}), 400


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/awards/definitions")
def api_award_definitions():
    language = normalize_language(request.args.get("lang", "en"))
    return jsonify({"language": language, "definitions": list_definitions(language)})


@app.route("/api/awards/period")
def api_award_period():
    month, year = default_period(clock=_now)
    return jsonify({
        "month": month,
        "year": year,
        "launch": {"month": LAUNCH_MONTH, "year": LAUNCH_YEAR},
    })


@app.route("/api/awards/compute", methods=["POST"])
def api_awards_compute():
    data = _json_body()
    try:
        members = _parse_members(data.get("members", []))
    except ValueError as exc:
        logger.warning("Rejected awards snapshot: %s", exc)
        return _bad_request(str(exc))

    month = _parse_int(data.get("month"))
    year = _parse_int(data.get("year"))
    if month is None or year is None:
        default_month, default_year = default_period(clock=_now)
        month = default_month if month is None else month
        year = default_year if year is None else year
    if not 0 <= month <= 11:
        return _bad_request("month must be between 0 and 11")

    language = normalize_language(data.get("language", "en"))
    awards = compute_monthly_awards(members, month, year, language=language)
    return jsonify({
        "month": month,
        "year": year,
        "language": language,
        "awards": [a.to_dict() for a in awards],
    })


@app.route("/api/awards/claim", methods=["POST"])
def api_awards_claim():
    data = _json_body()
    uid = str(data.get("uid", "")).strip()
    group_id = str(data.get("group_id", "")).strip()
    if not uid or not group_id:
        return _bad_request("uid and group_id are required")

    try:
        award = ComputedAward.from_dict(data.get("award"))
    except ValueError as exc:
        return _bad_request(str(exc))
    if not 0 <= award.month <= 11:
        return _bad_request("month must be between 0 and 11")

    group_name = str(data.get("group_name", "")).strip()[:120]
    _ensure_awards_db()
    won = claim_award(_awards_db_path(), uid=uid, group_id=group_id, group_name=group_name, award=award)
    return jsonify({"ok": True, "won_award": won.to_dict()})


@app.route("/api/awards/won/<uid>")
def api_awards_won(uid: str):
    _ensure_awards_db()
    limit = request.args.get("limit", type=int) or 100
    return jsonify({"items": [w.to_dict() for w in list_won_awards(_awards_db_path(), uid, limit=limit)]})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
