import os
from dataclasses import dataclass

from functions.fetch_rankings import CFBD_URL

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when required settings are missing; checked before any network call."""


@dataclass(frozen=True)
class Settings:
    api_key: str
    bucket_name: str
    base_url: str = CFBD_URL
    division: str = "fbs"
    timeout: float = 30
    enrich_teams: bool = True
    strict_enrichment: bool = False


def _flag(env, name, default):
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _secret_api_key(env):
    """Read the CFBD token from Secret Manager when it isn't in the environment."""
    from google.cloud import secretmanager

    project_id = env.get("GCP_PROJECT") or env.get("GOOGLE_CLOUD_PROJECT")
    if not project_id:
        raise ConfigError("CFBD_SECRET_ID is set but GCP_PROJECT is not")
    secret_id = env["CFBD_SECRET_ID"]
    version_id = env.get("CFBD_SECRET_VERSION") or "latest"

    sm = secretmanager.SecretManagerServiceClient()
    name = f"projects/{project_id}/secrets/{secret_id}/versions/{version_id}"
    response = sm.access_secret_version(request={"name": name})
    return response.payload.data.decode("UTF-8").strip()


def load_settings(environ=None):
    env = os.environ if environ is None else environ

    api_key = (env.get("CFBD_API_KEY") or "").strip()
    if not api_key and env.get("CFBD_SECRET_ID"):
        api_key = _secret_api_key(env)
    if not api_key:
        raise ConfigError("CFBD_API_KEY is not configured")

    bucket_name = (env.get("POLL_BUCKET") or "").strip()
    if not bucket_name:
        raise ConfigError("POLL_BUCKET is not configured")

    try:
        timeout = float(env.get("CFBD_TIMEOUT") or 30)
    except ValueError as e:
        raise ConfigError(f"CFBD_TIMEOUT must be a number, got {env.get('CFBD_TIMEOUT')!r}") from e

    return Settings(
        api_key=api_key,
        bucket_name=bucket_name,
        base_url=(env.get("CFBD_BASE_URL") or CFBD_URL).rstrip("/"),
        division=env.get("CFBD_DIVISION") or "fbs",
        timeout=timeout,
        enrich_teams=_flag(env, "ENRICH_TEAMS", True),
        strict_enrichment=_flag(env, "STRICT_ENRICHMENT", False),
    )
