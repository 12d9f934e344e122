import json
import re
from datetime import timezone

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_name(name):
    """Join key for a school: lowercase, alphanumerics only."""
    return _NON_ALNUM.sub("", (name or "").lower())


def build_color_map(teams):
    """Map join key -> hex color, falling back to the alternate color."""
    colors = {}
    for t in teams or []:
        color = t.get("color") or t.get("alt_color") or t.get("alternateColor")
        key = normalize_name(t.get("school"))
        if key and color:
            colors[key] = color
    return colors


def build_record_map(records):
    """Map join key -> {wins, losses, ties} season totals."""
    totals = {}
    for r in records or []:
        key = normalize_name(r.get("team"))
        if not key:
            continue
        total = r.get("total") or {}
        totals[key] = {
            "wins": total.get("wins") or 0,
            "losses": total.get("losses") or 0,
            "ties": total.get("ties") or 0,
        }
    return totals


def format_record(total):
    if not total:
        return ""
    rec = f"{total.get('wins', 0)}-{total.get('losses', 0)}"
    if (total.get("ties") or 0) > 0:
        rec += f"-{total['ties']}"
    return rec


def _iso_utc(now):
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_poll_json(label, selection, color_map, record_map, now):
    """
    Assemble the published poll document.

    `selection` is the output of parse_rankings.get_latest_poll. A row's own
    record wins over the season totals; missing colors come out as None.
    Returns None when there is nothing to publish.
    """
    if not selection or not selection.get("ranks"):
        return None

    color_map = color_map or {}
    record_map = record_map or {}

    teams = []
    for r in selection["ranks"]:
        key = normalize_name(r.get("school"))
        teams.append({
            "rk": r.get("rank"),
            "team": r.get("school"),
            "rec": r.get("record") or format_record(record_map.get(key)),
            "conf": r.get("conference") or "",
            "color": color_map.get(key),
        })

    return {
        "poll": label,
        "season": selection.get("season"),
        "week": selection.get("week"),
        "lastUpdated": _iso_utc(now),
        "teams": teams,
    }


def serialize_poll(doc):
    return json.dumps(doc, separators=(",", ":"), ensure_ascii=False)
