import logging
from typing import Any, Dict, List
from urllib.parse import urlparse

from pydantic import ValidationError

from data_extractor import is_profile_url
from models import Profile


class DataValidator:
    """Request-level validation: queries for search, profile selections for export."""

    def __init__(self):
        self.validation_stats = {
            'total_profiles': 0,
            'valid_profiles': 0,
            'invalid_profiles': 0,
            'validation_errors': []
        }

    def validate_query(self, query: Any) -> str:
        """Return the trimmed query or raise ValueError when it is missing."""
        if not isinstance(query, str) or not query.strip():
            raise ValueError("Query is required")
        return query.strip()

    def validate_linkedin_url(self, url: str) -> bool:
        """Validate LinkedIn profile URL format."""
        if not url or not isinstance(url, str):
            return False
        parsed = urlparse(url)
        return (
            parsed.scheme in ['http', 'https'] and
            'linkedin.com' in parsed.netloc.lower() and
            is_profile_url(url)
        )

    def validate_profile(self, raw: Dict[str, Any]) -> List[str]:
        """Collect problems with one selected profile record (empty list = valid)."""
        errors = []
        if not isinstance(raw, dict):
            return [f"Profile entry is not an object: {raw!r}"]
        url = raw.get('linkedinUrl') or raw.get('linkedin_url')
        if not url:
            errors.append("Missing required field: linkedinUrl")
        elif not self.validate_linkedin_url(url):
            errors.append(f"Invalid LinkedIn URL: {url}")
        if not raw.get('id'):
            errors.append("Missing required field: id")
        return errors

    def validate_selection(self, selection: Any) -> List[Profile]:
        """Parse the profiles selected for export; raise ValueError on an empty or broken selection."""
        if not isinstance(selection, list) or not selection:
            raise ValueError("No profiles provided")

        profiles: List[Profile] = []
        for raw in selection:
            self.validation_stats['total_profiles'] += 1
            errors = self.validate_profile(raw)
            if not errors:
                try:
                    profiles.append(Profile.model_validate(raw))
                except ValidationError as e:
                    errors.append(str(e))
            if errors:
                self.validation_stats['invalid_profiles'] += 1
                self.validation_stats['validation_errors'].extend(errors)
                logging.warning(f"Invalid profile in selection: {'; '.join(errors)}")
            else:
                self.validation_stats['valid_profiles'] += 1

        if self.validation_stats['invalid_profiles']:
            raise ValueError(
                f"{self.validation_stats['invalid_profiles']} of {self.validation_stats['total_profiles']} "
                f"selected profiles are invalid: {self.validation_stats['validation_errors'][0]}"
            )
        return profiles

    def get_validation_stats(self) -> Dict:
        """Return validation statistics."""
        return self.validation_stats.copy()
