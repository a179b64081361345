"""Domain models for extension documentation."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ViewType(str, Enum):
    """Rendering mode of a subtree, inherited by descendants."""

    BULLET = "bullet"
    DOCUMENT = "document"
    NUMBERED = "numbered"

    @classmethod
    def parse(cls, value: str) -> "ViewType":
        """Parse a declared view type, accepting the ``:keyword`` form."""
        return cls(value.removeprefix(":"))


EPOCH = datetime.fromtimestamp(0, tz=UTC)


@dataclass(frozen=True)
class RawNode:
    """A block or page as returned by a pull query."""

    string: str | None = None
    title: str | None = None
    uid: str | None = None
    order: int | None = None
    heading: int | None = None
    open: bool | None = None
    view_type: ViewType | None = None
    text_align: str | None = None
    edit_time: int | None = None
    props: dict[str, Any] | None = None
    children: tuple["RawNode", ...] = ()


@dataclass(frozen=True)
class OutlineNode:
    """A single line of documentation with its resolved text."""

    text: str
    open: bool = True
    order: int = 0
    uid: str = ""
    heading: int = 0
    view_type: ViewType = ViewType.BULLET
    edit_time: datetime = EPOCH
    text_align: str = "left"
    children: tuple["OutlineNode", ...] = ()


@dataclass(frozen=True)
class ReplacementSpan:
    """Replace ``text[start:end]`` of some original text with ``value``."""

    value: str
    start: int
    end: int


@dataclass(frozen=True)
class PageContent:
    """A loaded page or block: its formatted children and root text."""

    blocks: tuple[OutlineNode, ...]
    view_type: ViewType
    path: str
    text: str = ""


@dataclass(frozen=True)
class ExtensionItem:
    """Catalog metadata for one extension."""

    id: str
    state: str | None = None
    description: str | None = None
    src: str = ""
    download: str = ""
    featured: int = 0


@dataclass(frozen=True)
class Subpage:
    """A documented extension page nested under an extension id."""

    id: str
    subpage: tuple[str, ...]


@dataclass
class Response:
    """Lambda-style HTTP response envelope."""

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body, "headers": self.headers}
