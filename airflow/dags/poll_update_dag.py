from airflow.decorators import dag, task
from airflow.operators.python import get_current_context
from datetime import datetime
import requests
import pendulum

CF_URL = "https://us-central1-baratz00-ba882-fall25.cloudfunctions.net/poll_update"

# ---------- Helper ----------
def invoke_function(url, params=None) -> dict:
    resp = requests.get(url, params=params or {}, timeout=120)
    resp.raise_for_status()
    return resp.json()

# ---------- Global Config ----------
LOCAL_TZ = pendulum.timezone("America/New_York")

@dag(
    dag_id="cfbd_poll_update",
    schedule="0 15,21 * * 0,2",  # Sun + Tue, after AP / Coaches releases
    start_date=datetime(2025, 8, 1, tzinfo=LOCAL_TZ),
    catchup=False,
    max_active_runs=1,
    tags=["cfbd", "polls", "gcs"],
)
def cfbd_poll_update():

    @task
    def publish_polls() -> dict:
        ctx = get_current_context()
        data = invoke_function(CF_URL, params={"run_id": ctx["dag_run"].run_id})
        print(data)
        return data

    publish_polls()

cfbd_poll_update()
