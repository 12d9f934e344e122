import functions_framework
import json
import uuid
from datetime import datetime, timezone

from google.api_core.exceptions import GoogleAPIError

from functions.config import ConfigError, load_settings
from functions.fetch_rankings import UpstreamError
from functions.update_polls import run_update


def _utcnow():
    return datetime.now(timezone.utc)


def _respond(body, status, headers=None):
    out_headers = {"Content-Type": "application/json"}
    out_headers.update(headers or {})
    return (json.dumps(body), status, out_headers)


@functions_framework.http
def task(request):
    """Cloud Function entry point: publish the latest AP and Coaches polls to GCS."""
    if request.method != "GET":
        return _respond({"ok": False, "error": "Method not allowed"}, 405, {"Allow": "GET"})

    run_id = request.args.get("run_id") or uuid.uuid4().hex[:12]
    print(f"🚀 Starting CFBD poll update, run_id: {run_id}")

    # --- settings: fail before any network call ---
    try:
        settings = load_settings()
    except (ConfigError, GoogleAPIError) as e:
        print(f"❌ Configuration error: {e}")
        return _respond({"ok": False, "error": str(e), "run_id": run_id}, 500)
    except Exception as e:
        print(f"❌ Loading settings failed: {e}")
        return _respond({"ok": False, "error": str(e), "run_id": run_id}, 500)

    # --- fetch, build, publish ---
    try:
        result = run_update(settings, _utcnow(), run_id=run_id)
    except UpstreamError as e:
        print(f"❌ {e}: {e.body}")
        return _respond({
            "ok": False,
            "error": str(e),
            "upstreamStatus": e.status,
            "upstreamBody": e.body,
            "run_id": run_id,
        }, 502)
    except Exception as e:
        print(f"❌ Poll update failed: {e}")
        return _respond({"ok": False, "error": str(e), "run_id": run_id}, 500)

    if result["ok"]:
        print(f"✅ Poll update completed, published: {result['published']}")
    return _respond(result, 200 if result["ok"] else 500)
