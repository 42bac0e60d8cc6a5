from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


UNKNOWN_NAME = "Unknown"
NOT_SPECIFIED = "Not specified"


class Profile(BaseModel):
    """Candidate person extracted from one search result.

    Serialised with camelCase keys (``linkedinUrl``, ``inHubSpot``) so the JSON
    written by ``search`` can be fed straight back into ``export``.
    """

    id: str
    name: str = UNKNOWN_NAME
    title: str = NOT_SPECIFIED
    company: str = NOT_SPECIFIED
    linkedin_url: str = Field(alias="linkedinUrl")
    summary: str = ""
    in_hubspot: bool | None = Field(default=None, alias="inHubSpot")
    hubspot_contact_id: str | None = Field(default=None, alias="hubSpotContactId")

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    def annotate_crm(self, in_hubspot: bool, contact_id: str | None = None) -> "Profile":
        """Return a copy carrying the CRM dedup annotation."""
        return self.model_copy(update={"in_hubspot": in_hubspot, "hubspot_contact_id": contact_id})

    def to_public_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
