"""Active Directory (LDAP) access package.

Public API:
    - ADConfig, ADClient (ldap3 gateway)
    - DirectoryEntry (raw attribute view)
    - DirectoryUserRecord, DirectoryUserProjector, ProjectionPolicy
    - filter_by_ou
"""

from .models import ADConfig, DirectoryUserRecord
from .entry import DirectoryEntry
from .client import ADClient
from .projector import DirectoryUserProjector, ProjectionPolicy
from .utils import filter_by_ou

__all__ = [
    "ADConfig",
    "ADClient",
    "DirectoryEntry",
    "DirectoryUserRecord",
    "DirectoryUserProjector",
    "ProjectionPolicy",
    "filter_by_ou",
]
