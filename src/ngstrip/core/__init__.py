from ngstrip.core.errors import InvariantViolation, SourceParseError
from ngstrip.core.strip import strip_file, strip_parsed, strip_source

__all__ = [
    "InvariantViolation",
    "SourceParseError",
    "strip_file",
    "strip_parsed",
    "strip_source",
]
