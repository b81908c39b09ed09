"""
Directive specification and metadata models

Defines the parsed form of a directive line and the registry metadata
used to dispatch it.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class DirectiveKind(Enum):
    """
    Kinds of rayonix directives

    Any directive line whose keyword is not recognized, or which lacks an
    argument, is UNRECOGNIZED and has no effect.
    """
    IMPORT = "import"              # '!rayonix import path/to/file.bas
    META = "meta"                  # '!rayonix meta http://host/file.bas
    UNRECOGNIZED = "unrecognized"


@dataclass
class Directive:
    """
    A directive occurrence found while scanning a file

    Attributes:
        kind: What the directive asks for
        keyword: Second token of the line, as written
        argument: Text after the keyword and one separating space,
                  trailing CR/LF removed ("" when UNRECOGNIZED)
        context: Path of the file in which the directive was found
        line: The normalized directive line

    Example:
        For "'!rayonix import lib\\util.bas" in main.bas:
        Directive(kind=IMPORT, keyword="import", argument="lib/util.bas",
                  context="main.bas", line="'!rayonix import lib\\util.bas")
    """
    kind: DirectiveKind
    keyword: str
    argument: str
    context: str
    line: str = ""


@dataclass
class DirectiveSpec:
    """
    Specification for a rayonix directive

    Attributes:
        kind: Directive kind this spec handles
        description: Human-readable description
        handler: Resolution function (directive, buffer, context) -> buffer
        examples: Example usage strings, shown by `rayonix doc`
    """
    kind: DirectiveKind
    description: str
    handler: Callable
    examples: List[str] = field(default_factory=list)
