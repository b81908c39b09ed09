"""
Document-level data models

Type-safe structures produced by the line splitter and threaded through
directive resolution.
"""

import os
from enum import Enum
from dataclasses import dataclass, field
from typing import Tuple


class NewlineStyle(Enum):
    """Newline convention detected for a whole document"""
    CRLF = "\r\n"
    LF = "\n"


@dataclass(frozen=True)
class SourceDocument:
    """
    A document split into lines

    Produced by lines_split(). The newline characters themselves are not
    part of any line.

    Attributes:
        lines: Ordered lines of the document
        newline: Convention the lines were split on
        path: Where the content came from ("" for fetched content)
    """
    lines: Tuple[str, ...]
    newline: NewlineStyle
    path: str = ""


@dataclass(frozen=True)
class PathContext:
    """
    Location information for resolving an import

    Attributes:
        mainFile: The top-level entry file; fixed for the whole build
        currentFile: The file containing the directive being resolved
        chain: Real paths of the files currently being expanded, outermost
               first. An import whose target is already in the chain is a cycle.
    """
    mainFile: str
    currentFile: str
    chain: Tuple[str, ...] = field(default=())

    @classmethod
    def root_create(cls, mainFile: str) -> "PathContext":
        """Context for scanning the entry file itself"""
        return cls(
            mainFile=mainFile,
            currentFile=mainFile,
            chain=(os.path.realpath(mainFile),),
        )

    def descend(self, filePath: str) -> "PathContext":
        """Context for scanning a freshly imported file"""
        return PathContext(
            mainFile=self.mainFile,
            currentFile=filePath,
            chain=self.chain + (os.path.realpath(filePath),),
        )
