"""Protocols for dependency injection in the documentation pipeline."""

from typing import Any, Protocol, runtime_checkable

from roamjs_docs.models.node import ExtensionItem


@runtime_checkable
class QueryProtocol(Protocol):
    """Protocol for graph store query clients."""

    def query(self, query: str) -> list[list[Any]]:
        """Run a Datalog query and return its result rows."""
        ...


@runtime_checkable
class ItemStoreProtocol(Protocol):
    """Protocol for the extension catalog store."""

    def get_item(self, item_id: str) -> ExtensionItem | None:
        """Return the catalog item for an id, or None if unknown."""
        ...

    def scan(self) -> list[ExtensionItem]:
        """Return every catalog item."""
        ...


@runtime_checkable
class ReadmeFetcherProtocol(Protocol):
    """Protocol for fetching a GitHub repository README."""

    def __call__(self, repo_url: str) -> str:
        """Return the raw README text of a repository URL."""
        ...
