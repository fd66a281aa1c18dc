import logging
from pathlib import Path

from ngstrip.core.ast import ParsedSource, parse_file, parse_source
from ngstrip.core.classify import find_decorator_statements
from ngstrip.core.imports import find_framework_imports
from ngstrip.core.planner import plan_removals
from ngstrip.core.rewrite import apply_removals
from ngstrip.core.scopes import ScopeResolver
from ngstrip.models import RemovalSpan, StripConfig, StripResult

logger = logging.getLogger(__name__)


def strip_parsed(parsed: ParsedSource, config: StripConfig | None = None) -> StripResult:
    config = config or StripConfig()
    bindings = find_framework_imports(parsed, config.target_module, config.factory_names)

    spans: list[RemovalSpan] = []
    if bindings:
        decorators = find_decorator_statements(parsed.root)
        logger.debug("Found %d decorator assignment statement(s)", len(decorators))
        resolver = ScopeResolver(parsed.root)
        spans = plan_removals(parsed, decorators, bindings, resolver, strip_separators=config.strip_separators)

    text = apply_removals(parsed.text, spans, config.line_mode) if spans else parsed.text
    return StripResult(language=parsed.language, bindings=bindings.names, spans=spans, text=text)


def strip_source(text: str, language: str, config: StripConfig | None = None) -> StripResult:
    """Strip framework decorator metadata from ``text``."""
    return strip_parsed(parse_source(text, language), config)


def strip_file(path: str | Path, language: str | None = None, config: StripConfig | None = None) -> StripResult:
    return strip_parsed(parse_file(path, language), config)
