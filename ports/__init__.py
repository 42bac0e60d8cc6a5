from .llm import LLMClientPort
from .search import SearchClientPort
from .crm import CrmClientPort

__all__ = [
    "LLMClientPort",
    "SearchClientPort",
    "CrmClientPort",
]
