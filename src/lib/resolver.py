"""
Local import resolver

Resolves an import argument to a file using a three-tier fallback search,
then expands the file's own directives recursively.

Resolution order, each tier tried only if the previous one fails to open:
    1. The argument as given (absolute, or relative to the working directory)
    2. The argument under the entry file's directory
    3. The argument under the directory of the file holding the directive

Directory prefixes are computed by splitting on '/', so a path with no
slash has an empty prefix and the tier degenerates to tier 1.
"""

import os
from typing import List, Optional, Tuple

from ..config import AppSettings, appsettings
from ..models.document import PathContext
from .directives import DirectiveRegistry
from .errors import ImportCycleError, ImportResolutionError
from .log import LOG
from .splitter import lines_split


def directory_prefix(path: str) -> str:
    """
    Directory part of a path, with a trailing slash

    Example:
        >>> directory_prefix("proj/src/main.bas")
        'proj/src/'
        >>> directory_prefix("main.bas")
        ''
    """
    head, sep, _ = path.replace("\\", "/").rpartition("/")
    return head + sep


class ImportResolver:
    """
    Resolves '!rayonix import directives

    Nested directives in an imported file are resolved with the imported
    file's path as the new context, while the entry file stays fixed for
    tier 2 at every depth.
    """

    def __init__(self, registry: DirectiveRegistry, settings: Optional[AppSettings] = None) -> None:
        self.registry = registry
        self.settings = settings or appsettings

    def path_candidates(self, argument: str, context: PathContext) -> List[str]:
        """Candidate paths for an argument, in tier order"""
        return [
            argument,
            directory_prefix(context.mainFile) + argument,
            directory_prefix(context.currentFile) + argument,
        ]

    def file_read(self, argument: str, context: PathContext) -> Tuple[str, bytes]:
        """
        Open an import through the fallback tiers

        Returns:
            (path that opened, file content)

        Raises:
            ImportResolutionError: no tier could open the file; carries
                every attempt and its failure reason
        """
        attempts: List[Tuple[str, str]] = []

        for tier, candidate in enumerate(self.path_candidates(argument, context), start=1):
            try:
                with open(candidate, "rb") as f:
                    content = f.read()
            except (OSError, ValueError) as e:
                LOG(f"Tier {tier} failed for {argument!r}: {e}", level=2)
                attempts.append((candidate, str(e)))
                continue
            LOG(f"Tier {tier} resolved {argument!r} to {candidate}", level=3)
            return candidate, content

        raise ImportResolutionError(argument, context.currentFile, attempts)

    def cycle_check(self, filePath: str, context: PathContext) -> None:
        """Raise ImportCycleError if filePath is already being expanded"""
        if not self.settings.detect_cycles:
            return
        realpath = os.path.realpath(filePath)
        if realpath in context.chain:
            start = context.chain.index(realpath)
            raise ImportCycleError(list(context.chain[start:]) + [realpath])

    def import_resolve(self, argument: str, buffer: List[str], context: PathContext) -> List[str]:
        """
        Resolve one import and append its expansion to buffer

        The imported file's non-directive lines come first, followed by
        the content of its own directives; the whole expansion lands in
        buffer as one contiguous block.

        Args:
            argument: Import path, backslashes already normalized
            buffer: Caller's append buffer, extended in place
            context: Context of the file holding the directive

        Returns:
            buffer

        Raises:
            ImportResolutionError: the file could not be opened
            ImportCycleError: the file is one of its own ancestors
        """
        filePath, content = self.file_read(argument, context)
        self.cycle_check(filePath, context)

        document = lines_split(content, path=filePath, encoding=self.settings.encoding)
        LOG(f"Importing {filePath} ({len(document.lines)} lines)", level=2)

        local = self.registry.lines_expand(document.lines, context.descend(filePath))
        buffer.extend(local)
        return buffer
