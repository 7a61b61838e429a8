"""
==============================================================================
CMS Package - Content Service Access
==============================================================================

Classes:
--------
- ContentClient: async query client for the headless content service
- ContentServiceError: raised on any failed query

==============================================================================
"""

from .client import ContentClient, ContentServiceError
from .queries import PRODUCT_PROJECTION, product_query

__all__ = [
    "ContentClient",
    "ContentServiceError",
    "PRODUCT_PROJECTION",
    "product_query",
]
