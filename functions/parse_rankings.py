import re

MAX_TEAMS = 25

# Upstream poll names drift ("AP Top 25", "Coaches Poll", ...), so match loosely.
POLL_PATTERNS = {
    "AP": re.compile(r"ap", re.IGNORECASE),
    "Coaches": re.compile(r"coach", re.IGNORECASE),
}


def poll_matches(label, poll_name):
    """Return True if the free-text poll name belongs to the requested poll label."""
    if label not in POLL_PATTERNS:
        raise ValueError(f"Unknown poll label: {label!r}")
    return bool(POLL_PATTERNS[label].search(poll_name or ""))


def _find_poll(label, snapshot):
    polls = snapshot.get("polls")
    if not isinstance(polls, list):
        return None
    return next((p for p in polls if poll_matches(label, p.get("poll"))), None)


def _week_number(snapshot):
    try:
        return int(snapshot.get("week") or 0)
    except (TypeError, ValueError):
        return 0


def get_latest_poll(label, rankings):
    """
    Pick the latest week that carries the requested poll and return its ranks.

    Snapshots are compared by week; on equal weeks the one later in the
    upstream list wins. Returns None when no snapshot has the poll.
    """
    if not isinstance(rankings, list):
        return None

    latest = None
    latest_poll = None
    for snapshot in rankings:
        poll = _find_poll(label, snapshot)
        if poll is None:
            continue
        if latest is None or _week_number(snapshot) >= _week_number(latest):
            latest, latest_poll = snapshot, poll

    if latest is None:
        return None

    ranks = latest_poll.get("ranks")
    if not isinstance(ranks, list):
        ranks = []
    return {
        "season": latest.get("season"),
        "week": latest.get("week"),
        "ranks": [
            {
                "rank": r.get("rank"),
                "school": r.get("school"),
                "record": r.get("record") or "",
                "conference": r.get("conference") or "",
            }
            for r in ranks[:MAX_TEAMS]
        ],
    }
