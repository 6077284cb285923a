"""
Drinking sessions: a member's events split on long gaps of inactivity.
Timestamps are epoch milliseconds.
"""

from typing import Iterable, List

from awards_app.drinks import DrinkEvent

# A gap strictly longer than this starts a new session.
SESSION_GAP_MS = 8 * 60 * 60 * 1000


def split_sessions(events: Iterable[DrinkEvent], gap_ms: int = SESSION_GAP_MS) -> List[List[DrinkEvent]]:
    """Chronological sessions; empty input gives an empty list."""
    ordered = sorted(events, key=lambda e: e.timestamp)
    sessions: List[List[DrinkEvent]] = []
    current: List[DrinkEvent] = []
    for event in ordered:
        if current and event.timestamp - current[-1].timestamp > gap_ms:
            sessions.append(current)
            current = []
        current.append(event)
    if current:
        sessions.append(current)
    return sessions


def session_start(session: List[DrinkEvent]) -> int:
    return session[0].timestamp
