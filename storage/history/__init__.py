"""Query history log used by the AI search flow."""

from .dao import QueryHistory
from .models import QueryRecord

__all__ = ["QueryHistory", "QueryRecord"]
