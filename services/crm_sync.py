from __future__ import annotations

import logging
from typing import Iterable

from models import CrmSyncResult, Profile
from ports.crm import CrmClientPort
from services.hubspot_client import LINKEDIN_URL_PROPERTY
from services.mapping import map_to_contact_properties


def sync_to_crm(profiles: Iterable[Profile], crm: CrmClientPort) -> CrmSyncResult:
    """Upsert each profile as a contact: update when the LinkedIn URL is known, else create.

    Sequential; a failure is counted and the next profile is tried.
    """
    result = CrmSyncResult()
    for profile in profiles:
        properties = map_to_contact_properties(profile)
        try:
            existing = crm.find_by_field(LINKEDIN_URL_PROPERTY, profile.linkedin_url)
            if existing:
                crm.update(str(existing.get("id")), properties)
                result.updated += 1
            else:
                crm.create(properties)
                result.created += 1
        except Exception as e:
            logging.error(f"Failed to sync profile {profile.name}: {e}",
                          extra={"step": "sync_crm", "status": "error", "provider": "hubspot"})
            result.failed += 1

    logging.info(f"HubSpot sync results: created={result.created} updated={result.updated} failed={result.failed}")
    return result
