"""
Directive parsing and dispatch for rayonix

A directive line is tokenized into a Directive and routed through the
DirectiveRegistry to the handler registered for its kind. Handlers append
their resolved lines to the buffer they are given and return it.
"""

from typing import Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

from ..config import AppSettings, appsettings
from ..models.directives import Directive, DirectiveKind, DirectiveSpec
from ..models.document import PathContext
from .log import LOG
from .scanner import directive_is, line_normalize

if TYPE_CHECKING:
    from .fetcher import MetaFetcher
    from .resolver import ImportResolver


def directive_parse(line: str, context: str, settings: Optional[AppSettings] = None) -> Directive:
    """
    Tokenize a directive line

    The line is split on single spaces. The argument is not the third
    token: it is everything after the trigger, one space, the keyword and
    one more space. Extra spacing between those parts is not tolerated; a
    doubled space before the keyword yields an empty keyword (UNRECOGNIZED)
    and a doubled space before the argument becomes part of it.

    Args:
        line: Directive line, raw or normalized
        context: Path of the file containing the line
        settings: Grammar settings, defaults to the application settings

    Returns:
        Directive. Lines with fewer than two tokens, an unknown keyword, or
        no argument token are UNRECOGNIZED.

    Example:
        >>> directive_parse("'!rayonix import lib\\\\a.bas\\r\\n", "main.bas").argument
        'lib/a.bas'
    """
    settings = settings or appsettings
    normalized = line_normalize(line)
    tokens = normalized.split(" ")

    if len(tokens) < 2:
        return Directive(DirectiveKind.UNRECOGNIZED, "", "", context, normalized)

    keyword = tokens[1]
    if keyword == settings.import_keyword:
        kind = DirectiveKind.IMPORT
    elif keyword == settings.meta_keyword:
        kind = DirectiveKind.META
    else:
        return Directive(DirectiveKind.UNRECOGNIZED, keyword, "", context, normalized)

    if len(tokens) < 3:
        return Directive(DirectiveKind.UNRECOGNIZED, keyword, "", context, normalized)

    argument = normalized[settings.argumentOffset_get(keyword):]
    if kind is DirectiveKind.IMPORT:
        argument = argument.replace("\\", "/")
    argument = argument.replace("\r", "").replace("\n", "")

    return Directive(kind, keyword, argument, context, normalized)


class DirectiveRegistry:
    """
    Registry of directive specifications and handlers

    Maps directive kinds to DirectiveSpec objects and drives the line scan
    shared by the entry document and every imported file.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        """Initialize an empty registry"""
        self.settings = settings or appsettings
        self.specs: Dict[DirectiveKind, DirectiveSpec] = {}
        self.counts: Dict[DirectiveKind, int] = {kind: 0 for kind in DirectiveKind}

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.kind] = spec

    def get(self, kind: DirectiveKind) -> Optional[Callable]:
        """Get directive handler by kind"""
        spec = self.specs.get(kind)
        return spec.handler if spec else None

    def spec_get(self, kind: DirectiveKind) -> Optional[DirectiveSpec]:
        """Get full directive specification by kind"""
        return self.specs.get(kind)

    def builtinDirectives_register(self, resolver: "ImportResolver", fetcher: "MetaFetcher") -> None:
        """Register the import and meta directives"""

        def import_handler(directive: Directive, buffer: List[str], context: PathContext) -> List[str]:
            """Handle '!rayonix import - include a local file, rescanned"""
            return resolver.import_resolve(directive.argument, buffer, context)

        def meta_handler(directive: Directive, buffer: List[str], context: PathContext) -> List[str]:
            """Handle '!rayonix meta - include fetched text verbatim"""
            return fetcher.meta_fetch(directive.argument, buffer)

        trigger = self.settings.trigger_token
        self.register(DirectiveSpec(
            kind=DirectiveKind.IMPORT,
            description="Include a local file; its own directives are resolved too",
            handler=import_handler,
            examples=[
                f"{trigger} {self.settings.import_keyword} relative/path/to/file.bas",
                f"{trigger} {self.settings.import_keyword} /absolute/path/to/file.bas",
            ],
        ))
        self.register(DirectiveSpec(
            kind=DirectiveKind.META,
            description="Include text fetched over HTTP, never rescanned",
            handler=meta_handler,
            examples=[f"{trigger} {self.settings.meta_keyword} http://www.example.com/file.bas"],
        ))

    def flags_describe(self) -> List[str]:
        """
        Documentation lines for every registered directive

        Each spec contributes its examples followed by its indented
        description, in registration order.
        """
        lines: List[str] = []
        for spec in self.specs.values():
            lines.extend(f"  {example}" for example in spec.examples)
            lines.append(f"      {spec.description}")
        return lines

    def dispatch(self, directive: Directive, buffer: List[str], context: PathContext) -> List[str]:
        """
        Route a directive to its handler

        UNRECOGNIZED directives, and kinds with no registered handler,
        leave the buffer untouched.
        """
        handler = self.get(directive.kind)
        if handler is None:
            LOG(f"Ignoring directive in {directive.context}: {directive.line!r}", level=3)
            return buffer

        self.counts[directive.kind] += 1
        LOG(f"{directive.kind.value} {directive.argument!r} (from {directive.context})", level=2)
        return handler(directive, buffer, context)

    def lines_expand(self, lines: Sequence[str], context: PathContext) -> List[str]:
        """
        Scan lines, resolving every directive line

        Non-directive lines are kept in original order. Resolved content
        is collected in directive-encounter order into one append buffer
        that follows all of them, unless inline_imports is set, in which
        case each directive's content takes the directive line's place.

        Args:
            lines: Lines of the file being scanned
            context: Context whose currentFile is that file

        Returns:
            The expanded lines
        """
        finished: List[str] = []
        appended: List[str] = []
        target = finished if self.settings.inline_imports else appended

        for line in lines:
            if directive_is(line, self.settings.trigger_token):
                directive = directive_parse(line, context.currentFile, self.settings)
                self.dispatch(directive, target, context)
            else:
                finished.append(line)

        return finished + appended
