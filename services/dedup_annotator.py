from __future__ import annotations

import concurrent.futures as _fut
import logging
import time
from typing import Callable, List, Sequence

from models import Profile
from ports.crm import CrmClientPort
from services.hubspot_client import LINKEDIN_URL_PROPERTY


class DedupAnnotator:
    """Mark profiles that already exist in the CRM, keyed by LinkedIn URL.

    Lookups run ``batch_size`` at a time on a thread pool with a pause between
    groups to stay under the CRM rate limit; ``batch_size=1`` is plain
    sequential processing. A failed lookup only affects its own profile
    (``in_hubspot=False``). Output order always equals input order.
    """

    def __init__(
        self,
        crm: CrmClientPort,
        batch_size: int = 5,
        pause_seconds: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.crm = crm
        self.batch_size = max(1, int(batch_size))
        self.pause_seconds = max(0.0, float(pause_seconds))
        self._sleep = sleep

    def _lookup(self, profile: Profile) -> Profile:
        try:
            contact = self.crm.find_by_field(LINKEDIN_URL_PROPERTY, profile.linkedin_url)
        except Exception as e:
            logging.error(f"Error checking HubSpot for {profile.name}: {e}",
                          extra={"step": "annotate_crm", "status": "error", "provider": "hubspot"})
            return profile.annotate_crm(False)
        if contact:
            contact_id = contact.get("id")
            logging.debug(f"Found {profile.name} in HubSpot")
            return profile.annotate_crm(True, str(contact_id) if contact_id is not None else None)
        return profile.annotate_crm(False)

    def annotate(self, profiles: Sequence[Profile]) -> List[Profile]:
        annotated: List[Profile] = []
        total = len(profiles)
        for start in range(0, total, self.batch_size):
            if start > 0 and self.pause_seconds:
                self._sleep(self.pause_seconds)
            group = profiles[start:start + self.batch_size]
            if len(group) == 1:
                annotated.append(self._lookup(group[0]))
                continue
            with _fut.ThreadPoolExecutor(max_workers=len(group)) as ex:
                # map() yields in submission order
                annotated.extend(ex.map(self._lookup, group))

        in_crm = sum(1 for p in annotated if p.in_hubspot)
        logging.info(f"HubSpot check complete: {in_crm}/{len(annotated)} already in CRM")
        return annotated


def annotate(profiles: Sequence[Profile], crm_client: CrmClientPort, **kwargs) -> List[Profile]:
    return DedupAnnotator(crm_client, **kwargs).annotate(profiles)
