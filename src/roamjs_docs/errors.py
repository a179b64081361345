"""Error types raised while building extension documentation."""


class RoamDocsError(Exception):
    """Base class for documentation pipeline errors."""


class NotFoundError(RoamDocsError):
    """No catalog item exists for the requested extension id."""


class QueryError(RoamDocsError):
    """The graph store answered a query with an error status."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class RateLimitedError(QueryError):
    """The graph store reported HTTP 429."""

    def __init__(self, message: str = "Too Many Requests") -> None:
        super().__init__(message, status=429)


class UpstreamProtocolError(QueryError):
    """The graph store did not follow its redirect-based protocol."""


class ResolutionError(RoamDocsError):
    """A block reference could not be resolved."""


class ReferenceCycleError(ResolutionError):
    """An embed refers back to a block that is already being expanded."""

    def __init__(self, chain: tuple[str, ...]) -> None:
        super().__init__(f"Embed cycle detected: {' -> '.join(chain)}")
        self.chain = chain


class PullResultError(ValueError):
    """A pull result did not have the expected shape."""
