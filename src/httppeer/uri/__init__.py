"""
=============================================================================
URI HANDLING
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ QUERY STRING (query_string.py)                                      │
    │   "a=1&list[]=x&map[k]=y"  ◄──►  {"a": "1", "list": ["x"], ...}     │
    ├─────────────────────────────────────────────────────────────────────┤
    │ PARSED URI (parsed.py)                                              │
    │   component split, transpose(), canonical rendering                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │ URI (uri.py)                                                        │
    │   validation through SchemeRules, parameter helpers, DNS check      │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RECORDS (records.py)                                                │
    │   DNS record lookup through dnspython                               │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

from .parsed import ParsedUri
from .query_string import QueryString
from .records import RecordLookup, ResolverLookup
from .uri import SchemeRules, Uri

__all__ = [
    "ParsedUri",
    "QueryString",
    "RecordLookup",
    "ResolverLookup",
    "SchemeRules",
    "Uri",
]
