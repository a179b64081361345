"""Parse Roam pull results into RawNode trees."""

from typing import Any

from roamjs_docs.errors import PullResultError
from roamjs_docs.models.node import RawNode, ViewType

# attribute -> (RawNode field, expected type)
_ATTRIBUTES: dict[str, tuple[str, type | tuple[type, ...]]] = {
    "block/string": ("string", str),
    "node/title": ("title", str),
    "block/uid": ("uid", str),
    "block/order": ("order", int),
    "block/heading": ("heading", int),
    "block/open": ("open", bool),
    "block/text-align": ("text_align", str),
    "edit/time": ("edit_time", int),
    "block/props": ("props", dict),
}


def _attribute(key: str) -> str:
    """Strip the keyword colon: both ``:block/uid`` and ``block/uid`` are accepted."""
    return key.removeprefix(":")


def parse_pull_block(data: Any) -> RawNode:
    """Parse one pulled entity (and its nested children) into a RawNode.

    Args:
        data: A pull result map, keys in either qualified or bare form.

    Returns:
        The typed RawNode tree.

    Raises:
        PullResultError: If the value or one of its attributes has an unexpected type.
    """
    if not isinstance(data, dict):
        msg = f"Expected a pull result map, got {type(data).__name__}"
        raise PullResultError(msg)

    fields: dict[str, Any] = {}
    children: tuple[RawNode, ...] = ()
    for key, value in data.items():
        attr = _attribute(key)
        if value is None:
            continue
        if attr == "block/children":
            if not isinstance(value, list):
                msg = f"Expected a list for {key!r}, got {type(value).__name__}"
                raise PullResultError(msg)
            children = tuple(parse_pull_block(child) for child in value)
        elif attr == "children/view-type":
            if not isinstance(value, str):
                msg = f"Expected a keyword for {key!r}, got {value!r}"
                raise PullResultError(msg)
            try:
                fields["view_type"] = ViewType.parse(value)
            except ValueError as e:
                msg = f"Unknown view type {value!r}"
                raise PullResultError(msg) from e
        elif attr in _ATTRIBUTES:
            name, expected = _ATTRIBUTES[attr]
            # bool is an int subclass, so order/heading must reject it explicitly
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                msg = f"Expected {expected!r} for {key!r}, got {value!r}"
                raise PullResultError(msg)
            fields[name] = value

    return RawNode(children=children, **fields)


def first_entity(rows: list[list[Any]]) -> RawNode | None:
    """Return the first field of the first result row, parsed, or None for no results."""
    if not rows or not rows[0] or rows[0][0] is None:
        return None
    return parse_pull_block(rows[0][0])
