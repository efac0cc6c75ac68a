"""Input/output components for reportlint.

This package contains corpus discovery and verbatim document storage.
"""

from .corpus import DocumentStore, discover_documents

__all__ = ["DocumentStore", "discover_documents"]
