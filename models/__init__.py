from .search_result import SearchResult
from .parsed_query import ParsedQuery
from .profile import Profile, UNKNOWN_NAME, NOT_SPECIFIED
from .crm_sync_result import CrmSyncResult

__all__ = [
    "SearchResult",
    "ParsedQuery",
    "Profile",
    "UNKNOWN_NAME",
    "NOT_SPECIFIED",
    "CrmSyncResult",
]
