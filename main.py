import json
from datetime import datetime, timezone

from functions.config import load_settings
from functions.update_polls import run_update

# Cloud Functions entry point (deploy with --source . --entry-point task)
from functions.poll_update.main import task  # noqa: F401


def main():
    print("🚀 Starting CFBD Poll Pipeline")

    settings = load_settings()
    result = run_update(settings, datetime.now(timezone.utc), run_id="local")
    print(json.dumps(result, indent=2))

    print("✅ Pipeline finished successfully!" if result["ok"] else "⚠️ Pipeline finished with errors.")


if __name__ == "__main__":
    main()
