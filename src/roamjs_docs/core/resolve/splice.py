"""Apply positional replacements to an immutable original text."""

from collections.abc import Iterable

from roamjs_docs.models.node import ReplacementSpan


def apply_replacements(text: str, spans: Iterable[ReplacementSpan]) -> str:
    """Replace each span of ``text`` with its value.

    Spans index into the original ``text``. They are applied from the highest
    start offset down, so a replacement never shifts the offsets of the spans
    still to be applied. Spans must not overlap.
    """
    result = text
    for span in sorted(spans, key=lambda s: s.start, reverse=True):
        result = f"{result[: span.start]}{span.value}{result[span.end :]}"
    return result


def spans_overlap(spans: Iterable[ReplacementSpan]) -> bool:
    """Return True if any two spans share at least one character."""
    ordered = sorted(spans, key=lambda s: (s.start, s.end))
    return any(a.end > b.start for a, b in zip(ordered, ordered[1:]))
