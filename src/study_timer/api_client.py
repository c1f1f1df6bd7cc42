from __future__ import annotations

"""HTTP client for the Lumina REST API.

Implements both the preferences store and the study-time ledger on top of
``/api/user/preferences`` and ``/api/user/study-hours``. The user is
identified by the ``user_id`` cookie, as issued by the login route.

Rate limits, server errors and transport failures are retried with
exponential backoff; other 4xx responses fail immediately.
"""

from dataclasses import dataclass
import logging
import time
from typing import Any

import httpx

from .models import PreferencesSnapshot
from .stores import LedgerError, PreferencesError, StoreError

logger = logging.getLogger(__name__)

PREFERENCES_PATH = "/api/user/preferences"
STUDY_HOURS_PATH = "/api/user/study-hours"


class _Retryable(Exception):
    pass


@dataclass(slots=True)
class ApiClientConfig:
    base_url: str
    user_id: str
    timeout: float = 10.0
    max_retries: int = 3
    backoff_base: float = 0.75


class LuminaApiClient:
    def __init__(self, config: ApiClientConfig, transport: httpx.BaseTransport | None = None):
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
            headers={"Cookie": f"user_id={config.user_id}"},
        )

    def close(self) -> None:  # pragma: no cover simple
        self._client.close()

    # --- PreferencesStore -------------------------------------------------
    def load_preferences(self) -> PreferencesSnapshot:
        data = self._request("GET", PREFERENCES_PATH, PreferencesError)
        subjects = data.get("subjects")
        colors = data.get("subjectcolors")
        if not isinstance(subjects, list) or not isinstance(colors, dict):
            raise PreferencesError("Failed to load user preferences.")
        names = [str(s).strip().lower() for s in subjects]
        return PreferencesSnapshot(
            subjects=list(dict.fromkeys(n for n in names if n)),
            colors={str(k).strip().lower(): str(v) for k, v in colors.items()},
        )

    def save_preferences(self, snapshot: PreferencesSnapshot) -> None:
        body = {"subjects": list(snapshot.subjects), "subjectcolors": dict(snapshot.colors)}
        self._request("POST", PREFERENCES_PATH, PreferencesError, json=body)

    # --- StudyTimeLedger --------------------------------------------------
    def add_study_time(self, subject: str, date: str, hours: float) -> None:
        body = {"date": date, "subject": subject, "duration": hours}
        self._request("POST", STUDY_HOURS_PATH, LedgerError, json=body)

    def study_time_for(self, date: str) -> dict[str, float]:
        data = self._request("GET", STUDY_HOURS_PATH, LedgerError, params={"date": date})
        study_time = data.get("studyTime") or {}
        if not isinstance(study_time, dict):
            raise LedgerError("Failed to load study time")
        try:
            return {str(k): float(v) for k, v in study_time.items()}
        except (TypeError, ValueError) as e:
            raise LedgerError(f"Malformed study time payload: {e}") from e

    # --- Transport --------------------------------------------------------
    def _request(self, method: str, path: str, error_cls: type[StoreError], **kwargs: Any) -> dict:
        attempt = 0
        while True:
            try:
                resp = self._client.request(method, path, **kwargs)
                if resp.status_code == 429 or resp.status_code >= 500:
                    raise _Retryable(f"HTTP {resp.status_code}: {_error_message(resp)}")
                if resp.status_code >= 400:
                    raise error_cls(f"HTTP {resp.status_code}: {_error_message(resp)}")
                if not resp.content:
                    return {}
                data = resp.json()
                if not isinstance(data, dict):
                    raise error_cls(f"Unexpected response from {path}")
                return data
            except (_Retryable, httpx.TransportError) as e:
                attempt += 1
                if attempt > self._config.max_retries:
                    raise error_cls(str(e)) from e
                sleep_for = self._config.backoff_base * (2 ** (attempt - 1))
                logger.warning("%s %s failed (%s); retry %d in %.2fs", method, path, e, attempt, sleep_for)
                time.sleep(sleep_for)
            except ValueError as e:  # invalid JSON body
                raise error_cls(f"Invalid JSON from {path}: {e}") from e


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return resp.text[:200]


__all__ = ["ApiClientConfig", "LuminaApiClient"]
