from __future__ import annotations

from typing import Any, Dict, List, Tuple

from models import Profile
from services.hubspot_client import LINKEDIN_URL_PROPERTY


CSV_COLUMNS: List[str] = ["Name", "Title", "Company", "Bio", "LinkedIn URL"]


def split_name(full_name: str) -> Tuple[str, str]:
    """Split on the first space: "Mary Ann Smith" -> ("Mary", "Ann Smith")."""
    text = full_name or ""
    first, _, rest = text.partition(" ")
    return (first or text), rest


def map_to_contact_properties(profile: Profile) -> Dict[str, Any]:
    """Map a Profile to HubSpot contact properties."""
    first, last = split_name(profile.name)
    return {
        "firstname": first,
        "lastname": last,
        "jobtitle": profile.title,
        "company": profile.company,
        LINKEDIN_URL_PROPERTY: profile.linkedin_url,
    }


def map_to_csv_row(profile: Profile) -> Dict[str, str]:
    return {
        "Name": profile.name,
        "Title": profile.title,
        "Company": profile.company,
        "Bio": profile.summary,
        "LinkedIn URL": profile.linkedin_url,
    }
