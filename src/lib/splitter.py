"""
Line splitter

Detects a document's newline convention and splits it into lines. The
first positive test wins for the whole document: if CR LF occurs anywhere
the document is split on CR LF, otherwise on LF alone. Mixed conventions
are not reconciled.
"""

from typing import Optional, Union

from ..config import appsettings
from ..models.document import NewlineStyle, SourceDocument


def text_decode(raw: Union[bytes, str], encoding: Optional[str] = None) -> str:
    """
    Decode raw content, keeping undecodable bytes recoverable.

    Undecodable bytes become lone surrogates (surrogateescape) and are
    turned back into the same bytes when the output is encoded the same way.
    """
    if isinstance(raw, str):
        return raw
    return raw.decode(encoding or appsettings.encoding, errors="surrogateescape")


def newline_detect(text: str) -> NewlineStyle:
    """CRLF if the sequence appears anywhere, else LF"""
    if NewlineStyle.CRLF.value in text:
        return NewlineStyle.CRLF
    return NewlineStyle.LF


def lines_split(raw: Union[bytes, str], path: str = "", encoding: Optional[str] = None) -> SourceDocument:
    """
    Split raw content into a SourceDocument

    Args:
        raw: File or response content
        path: Origin of the content, kept on the document for diagnostics
        encoding: Overrides the configured encoding for bytes input

    Returns:
        SourceDocument whose lines carry no newline characters. Content
        ending in a newline yields a trailing empty line.

    Example:
        >>> lines_split(b"a\\r\\nb\\r\\n").lines
        ('a', 'b', '')
        >>> lines_split(b"a\\nb").newline
        <NewlineStyle.LF: '\\n'>
    """
    text = text_decode(raw, encoding)
    newline = newline_detect(text)
    return SourceDocument(lines=tuple(text.split(newline.value)), newline=newline, path=path)
