from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class CrmClientPort(Protocol):
    def find_by_field(self, field_name: str, value: str) -> Optional[Dict[str, Any]]:
        """Return the first contact whose property equals ``value``, or None."""
        ...

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def update(self, contact_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        ...
