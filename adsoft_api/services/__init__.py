"""Application service layer.

Stable import surface for routers:
    from adsoft_api.services import ...
"""

from .config_codec import GeneratedKeys, SecretCodec, encryption_snippet
from .directory import DirectoryGateway, DirectoryService

__all__ = [
    "DirectoryGateway",
    "DirectoryService",
    "GeneratedKeys",
    "SecretCodec",
    "encryption_snippet",
]
