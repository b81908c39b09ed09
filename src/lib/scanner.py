"""
Directive scanner

Decides whether a line is a directive line. Detection is a plain prefix
test on the normalized line; quoted strings are not understood, so a line
that starts with the trigger token inside a string literal is still taken
as a directive.
"""

from typing import Optional

from ..config import appsettings


def line_normalize(line: str) -> str:
    """Replace every tab with a space, then drop leading spaces"""
    return line.replace("\t", " ").lstrip(" ")


def directive_is(line: str, trigger: Optional[str] = None) -> bool:
    """
    Check whether a raw line is a directive line

    Args:
        line: Line as it appears in the document
        trigger: Trigger token, defaults to the configured one

    Example:
        >>> directive_is("\\t  '!rayonix import a.bas")
        True
        >>> directive_is("print \\"'!rayonix import a.bas\\"")
        False
    """
    return line_normalize(line).startswith(trigger or appsettings.trigger_token)
