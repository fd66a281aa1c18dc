"""Length-preserving text rewriting.

Each removed span is replaced by a placeholder of exactly the same length, so
every offset recorded against the original text stays valid for the output.
"""

from collections.abc import Iterable

from ngstrip.core.errors import InvariantViolation
from ngstrip.models import LineMode, RemovalSpan

_LINE_BREAKS = frozenset("\r\n")


def placeholder(removed: str, line_mode: LineMode = "collapse") -> str:
    if not removed:
        return ""
    if line_mode == "preserve":
        return "".join(ch if ch in _LINE_BREAKS else " " for ch in removed)
    return " " * (len(removed) - 1) + "\n"


def apply_removals(text: str, spans: Iterable[RemovalSpan], line_mode: LineMode = "collapse") -> str:
    ordered = sorted(spans, key=lambda span: (span.start, span.end))
    segments: list[str] = []
    cursor = 0
    for span in ordered:
        if span.start < cursor:
            raise InvariantViolation(
                f"Removal span [{span.start}, {span.end}) overlaps an earlier span ending at {cursor}"
            )
        if span.end > len(text):
            raise InvariantViolation(f"Removal span [{span.start}, {span.end}) exceeds text length {len(text)}")
        segments.append(text[cursor : span.start])
        segments.append(placeholder(text[span.start : span.end], line_mode))
        cursor = span.end
    segments.append(text[cursor:])

    result = "".join(segments)
    if len(result) != len(text):
        raise InvariantViolation(f"Rewritten text length {len(result)} differs from original {len(text)}")
    return result
