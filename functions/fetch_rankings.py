import requests

CFBD_URL = "https://api.collegefootballdata.com"


class UpstreamError(Exception):
    """Raised when a CFBD endpoint answers with a non-2xx status (or not at all)."""

    def __init__(self, source, status=None, body=""):
        self.source = source
        self.status = status
        self.body = (body or "")[:500]
        super().__init__(f"CFBD {source} fetch failed (status={status})")


def _get(source, url, api_key, params, timeout):
    headers = {"Authorization": f"Bearer {api_key}"}
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as e:
        raise UpstreamError(source, None, str(e)) from e

    if not response.ok:
        raise UpstreamError(source, response.status_code, response.text)

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(source, response.status_code, response.text) from e

    print(f"✅ CFBD {source} fetch successful.")
    return data


def fetch_rankings_from_cfbd(year, api_key, base_url=CFBD_URL, timeout=30):
    """Fetch every weekly poll snapshot CFBD has for the season."""
    return _get("rankings", f"{base_url}/rankings", api_key, {"year": year}, timeout)


def fetch_teams_from_cfbd(year, api_key, division="fbs", base_url=CFBD_URL, timeout=30):
    """Fetch team metadata (school, color, alt_color) for the season."""
    params = {"year": year, "division": division}
    return _get("teams", f"{base_url}/teams", api_key, params, timeout)


def fetch_records_from_cfbd(year, api_key, division="fbs", base_url=CFBD_URL, timeout=30):
    """Fetch season win/loss totals per team."""
    params = {"year": year, "division": division}
    return _get("records", f"{base_url}/records", api_key, params, timeout)
