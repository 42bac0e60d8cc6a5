from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional

import requests

from config.settings import Settings, get_settings
from utils.api_logger import log_call


CONTACTS_PATH = "/crm/v3/objects/contacts"
LINKEDIN_URL_PROPERTY = "hs_linkedin_url"

# Statuses worth another attempt; everything else surfaces immediately
_RETRY_STATUSES = {429, 500, 502, 503, 504}


class HubSpotClient:
    """Thin HubSpot CRM v3 contacts client: exact-match search, create, update."""

    provider_name = "hubspot"

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None, sleep=time.sleep) -> None:
        self.settings = settings or get_settings()
        if not self.settings.hubspot_access_token:
            raise ValueError("HUBSPOT_ACCESS_TOKEN must be set to use the CRM client")
        self.base_url = self.settings.hubspot_base_url.rstrip("/")
        # requests.Session is not thread-safe; dedup lookups run on a pool, so each thread gets its own
        self._shared_session = session
        if session is not None:
            self._configure(session)
        self._local = threading.local()
        self._sleep = sleep

    def _configure(self, session: requests.Session) -> requests.Session:
        session.headers.update({
            "Authorization": f"Bearer {self.settings.hubspot_access_token}",
            "Content-Type": "application/json",
        })
        return session

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = self._configure(requests.Session())
        return session

    def _request(self, method: str, path: str, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        attempts = max(1, self.settings.max_retries)
        for attempt in range(attempts):
            t0 = time.time()
            try:
                response = self.session.request(method, url, json=payload, timeout=self.settings.request_timeout_seconds)
            except requests.exceptions.RequestException as e:
                log_call(settings=self.settings, caller="hubspot_client", provider=self.provider_name, operation=operation,
                         duration_ms=int((time.time() - t0) * 1000), status="error", error=str(e))
                if attempt < attempts - 1:
                    self._sleep(2 ** attempt)
                    continue
                raise

            duration_ms = int((time.time() - t0) * 1000)
            if response.status_code in _RETRY_STATUSES and attempt < attempts - 1:
                logging.warning(f"HubSpot {operation} returned {response.status_code}, retrying")
                log_call(settings=self.settings, caller="hubspot_client", provider=self.provider_name, operation=operation,
                         duration_ms=duration_ms, status="retry", error=f"HTTP {response.status_code}")
                retry_after = response.headers.get("Retry-After")
                self._sleep(float(retry_after) if retry_after and retry_after.isdigit() else 2 ** attempt)
                continue

            if response.status_code >= 400:
                log_call(settings=self.settings, caller="hubspot_client", provider=self.provider_name, operation=operation,
                         duration_ms=duration_ms, status="error", error=f"HTTP {response.status_code}")
                response.raise_for_status()

            log_call(settings=self.settings, caller="hubspot_client", provider=self.provider_name, operation=operation,
                     duration_ms=duration_ms, status="ok")
            return response.json() if response.content else {}
        # Unreachable: the final attempt either returns or raises
        raise RuntimeError(f"HubSpot {operation} failed after {attempts} attempts")

    def find_by_field(self, field_name: str, value: str) -> Optional[Dict[str, Any]]:
        body = {
            "filterGroups": [
                {"filters": [{"propertyName": field_name, "operator": "EQ", "value": value}]}
            ],
            "properties": ["firstname", "lastname"],
            "limit": 1,
        }
        data = self._request("POST", f"{CONTACTS_PATH}/search", "contacts.search", body)
        results = data.get("results") or []
        return results[0] if results else None

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", CONTACTS_PATH, "contacts.create", {"properties": properties})

    def update(self, contact_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"{CONTACTS_PATH}/{contact_id}", "contacts.update", {"properties": properties})


def build_crm_client(settings: Optional[Settings] = None) -> Optional[HubSpotClient]:
    """Return a CRM client when a token is configured, otherwise None (dedup/sync off)."""
    settings = settings or get_settings()
    if not settings.crm_available:
        return None
    return HubSpotClient(settings)
