# Namespace for pipeline steps
from .validate_query import ValidateQuery  # noqa: F401
from .interpret_query import InterpretQuery  # noqa: F401
from .search_profiles import SearchProfiles  # noqa: F401
from .extract_profiles import ExtractProfiles, FilterMatches  # noqa: F401
from .annotate_crm import AnnotateCrm  # noqa: F401
from .validate_selection import ValidateSelection  # noqa: F401
from .export_profiles import SyncCrm, WriteCsv  # noqa: F401
