from concurrent.futures import ThreadPoolExecutor

from google.cloud import storage

from functions.enrich_rankings import build_color_map, build_poll_json, build_record_map
from functions.export_rankings import POLL_OBJECTS, publish_poll
from functions.fetch_rankings import (
    UpstreamError,
    fetch_rankings_from_cfbd,
    fetch_records_from_cfbd,
    fetch_teams_from_cfbd,
)
from functions.parse_rankings import get_latest_poll

POLLS = ("AP", "Coaches")
URL_KEYS = {"AP": "apUrl", "Coaches": "coachesUrl"}


def _enrichment_result(source, future, strict):
    if future is None:
        return []
    try:
        data = future.result()
    except UpstreamError as e:
        if strict:
            raise
        print(f"⚠️ {e}; continuing without {e.source} enrichment.")
        return []

    if not isinstance(data, list):
        if strict:
            raise UpstreamError(source, None, f"expected a JSON array, got {type(data).__name__}")
        print(f"⚠️ CFBD {source} payload is not a list; continuing without {source} enrichment.")
        return []
    return data


def fetch_inputs(settings, year):
    """
    Fetch rankings, teams and records concurrently.

    A rankings failure always raises UpstreamError. Teams/records failures only
    raise when settings.strict_enrichment is on; otherwise they come back empty.
    """
    common = {"base_url": settings.base_url, "timeout": settings.timeout}
    with ThreadPoolExecutor(max_workers=3) as pool:
        rankings_f = pool.submit(fetch_rankings_from_cfbd, year, settings.api_key, **common)
        teams_f = records_f = None
        if settings.enrich_teams:
            teams_f = pool.submit(
                fetch_teams_from_cfbd, year, settings.api_key, division=settings.division, **common
            )
            records_f = pool.submit(
                fetch_records_from_cfbd, year, settings.api_key, division=settings.division, **common
            )

        rankings = rankings_f.result()
        teams = _enrichment_result("teams", teams_f, settings.strict_enrichment)
        records = _enrichment_result("records", records_f, settings.strict_enrichment)

    return rankings, teams, records


def build_documents(rankings, teams, records, now):
    color_map = build_color_map(teams)
    record_map = build_record_map(records)

    docs = {}
    for label in POLLS:
        doc = build_poll_json(label, get_latest_poll(label, rankings), color_map, record_map, now)
        if doc is None:
            print(f"⚠️ {label} poll not found in CFBD response.")
            continue
        print(f"✅ Parsed {label} poll ({len(doc['teams'])} teams, week {doc['week']}).")
        docs[label] = doc
    return docs


def publish_documents(docs, bucket_name, client):
    """Upload every document concurrently; one poll failing never hides the other."""
    urls, errors = {}, {}
    if not docs:
        return urls, errors

    with ThreadPoolExecutor(max_workers=len(docs)) as pool:
        futures = {
            label: pool.submit(publish_poll, doc, POLL_OBJECTS[label], bucket_name, client)
            for label, doc in docs.items()
        }
        for label, future in futures.items():
            try:
                urls[label] = future.result()
            except Exception as e:  # reported per poll in the response
                print(f"❌ Upload of {label} poll failed: {e}")
                errors[label] = str(e)
    return urls, errors


def run_update(settings, now, run_id=None, storage_client=None):
    """Fetch, build and publish both polls. Returns the JSON-able response body."""
    year = now.year
    print(f"🏈 Updating polls for {year} (run_id={run_id})")

    rankings, teams, records = fetch_inputs(settings, year)
    docs = build_documents(rankings, teams, records, now)

    if docs and storage_client is None:
        storage_client = storage.Client()
    urls, errors = publish_documents(docs, settings.bucket_name, storage_client)

    out = {"ok": not errors, "run_id": run_id, "published": [label for label in POLLS if label in urls]}
    for label, url in urls.items():
        out[URL_KEYS[label]] = url
    if errors:
        out["error"] = "Storage write failed for " + ", ".join(sorted(errors))
        out["errors"] = errors
    return out
