"""Render RoamJS extension documentation from a Roam graph."""

from roamjs_docs.api import RoamApi, fetch_github_readme
from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.handlers.request_path import RequestParams, handle_request_path, handler
from roamjs_docs.protocols import ItemStoreProtocol, QueryProtocol, ReadmeFetcherProtocol

__all__ = [
    "GraphReader",
    "ItemStoreProtocol",
    "QueryProtocol",
    "ReadmeFetcherProtocol",
    "RequestParams",
    "RoamApi",
    "fetch_github_readme",
    "handle_request_path",
    "handler",
]
