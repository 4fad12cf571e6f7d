"""
Resource wrappers
=================

Thin request-shaping classes over the transport contract. Each wrapper
holds a reference to the shared ArangoHttpClient and never builds URLs
or touches authentication itself.
"""

from .admin import AdminAPI
from .analyzer import AnalyzerAPI
from .collection import TYPE_DOCUMENT, TYPE_EDGE, CollectionAPI
from .database import DatabaseAPI
from .document import DocumentAPI, DocumentOptions, ImportOptions
from .foxx import FoxxAPI, ServiceOptions
from .graph import GraphAPI, GraphElementOptions
from .index import IndexAPI
from .user import UserAPI
from .view import TYPE_ARANGOSEARCH, TYPE_SEARCH_ALIAS, ViewAPI

__all__ = [
    "AdminAPI",
    "AnalyzerAPI",
    "CollectionAPI",
    "DatabaseAPI",
    "DocumentAPI",
    "DocumentOptions",
    "FoxxAPI",
    "GraphAPI",
    "GraphElementOptions",
    "ImportOptions",
    "IndexAPI",
    "ServiceOptions",
    "TYPE_ARANGOSEARCH",
    "TYPE_DOCUMENT",
    "TYPE_EDGE",
    "TYPE_SEARCH_ALIAS",
    "UserAPI",
    "ViewAPI",
]
