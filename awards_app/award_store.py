"""SQLite-backed history of claimed (won) awards."""

from __future__ import annotations

import logging
import sqlite3
import time
from dataclasses import asdict, dataclass
from typing import Any

from awards_app.resolver import ComputedAward

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WonAward:
    award_id: str
    uid: str
    group_id: str
    group_name: str
    month: int  # 0-indexed
    year: int
    value: str
    won_at: int  # epoch ms

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def init_db(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS won_awards (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                uid TEXT NOT NULL,
                award_id TEXT NOT NULL,
                group_id TEXT NOT NULL,
                group_name TEXT NOT NULL DEFAULT '',
                month INTEGER NOT NULL,
                year INTEGER NOT NULL,
                value TEXT NOT NULL,
                won_at INTEGER NOT NULL,
                UNIQUE (uid, award_id, group_id, month, year)
            )
            """
        )
        conn.commit()


def _row_to_award(row: sqlite3.Row) -> WonAward:
    return WonAward(
        award_id=row["award_id"],
        uid=row["uid"],
        group_id=row["group_id"],
        group_name=row["group_name"],
        month=row["month"],
        year=row["year"],
        value=row["value"],
        won_at=row["won_at"],
    )


def _find(conn: sqlite3.Connection, uid: str, award_id: str, group_id: str, month: int, year: int) -> WonAward | None:
    row = conn.execute(
        """
        SELECT uid, award_id, group_id, group_name, month, year, value, won_at
        FROM won_awards
        WHERE uid = ? AND award_id = ? AND group_id = ? AND month = ? AND year = ?
        """,
        (uid, award_id, group_id, month, year),
    ).fetchone()
    return _row_to_award(row) if row else None


def claim_award(
    db_path: str,
    *,
    uid: str,
    group_id: str,
    award: ComputedAward,
    group_name: str = "",
    now: int | None = None,
) -> WonAward:
    """Record a computed award in the member's permanent history.

    Claiming the same award (same member, group and month) twice returns the
    first record unchanged.
    """
    won = WonAward(
        award_id=award.award_id,
        uid=uid,
        group_id=group_id,
        group_name=group_name,
        month=award.month,
        year=award.year,
        value=str(award.value),
        won_at=int(time.time() * 1000) if now is None else now,
    )
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        cur = conn.execute(
            """
            INSERT OR IGNORE INTO won_awards (uid, award_id, group_id, group_name, month, year, value, won_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (won.uid, won.award_id, won.group_id, won.group_name, won.month, won.year, won.value, won.won_at),
        )
        conn.commit()
        if cur.rowcount == 0:
            logger.info("Award %s already claimed by %s for %d-%02d", won.award_id, uid, won.year, won.month + 1)
            existing = _find(conn, uid, won.award_id, group_id, won.month, won.year)
            if existing is not None:
                return existing
    logger.info("Award %s claimed by %s in group %s", won.award_id, uid, group_id)
    return won


def list_won_awards(db_path: str, uid: str, limit: int = 100) -> list[WonAward]:
    with sqlite3.connect(db_path) as conn:
        conn.row_factory = sqlite3.Row
        rows = conn.execute(
            """
            SELECT uid, award_id, group_id, group_name, month, year, value, won_at
            FROM won_awards
            WHERE uid = ?
            ORDER BY year DESC, month DESC, id ASC
            LIMIT ?
            """,
            (uid, max(1, min(limit, 500))),
        ).fetchall()
    return [_row_to_award(row) for row in rows]
