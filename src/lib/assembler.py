"""
Document assembler for rayonix projects

Flattens an entry file and everything it imports into a single document.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.directives import DirectiveKind
from ..models.document import PathContext
from .directives import DirectiveRegistry
from .errors import OutputWriteError, SourceReadError
from .fetcher import MetaFetcher
from .log import LOG
from .resolver import ImportResolver
from .splitter import lines_split


class Assembler:
    """
    Builds a single output file from a multi-file project

    Responsibilities:
    - Read and split the entry file
    - Resolve every directive, recursively for imports
    - Place all non-directive lines of the entry file first, followed by
      all resolved content in directive-encounter order
    - Write the output only after resolution has fully succeeded
    """

    def __init__(
        self,
        mainFile: str,
        settings: Optional[AppSettings] = None,
        fetcher: Optional[MetaFetcher] = None,
    ) -> None:
        """
        Initialize assembler

        Args:
            mainFile: Entry file; its directory is tier 2 of the import search
            settings: Application settings (defaults to the singleton)
            fetcher: Meta fetcher to use (defaults to a urllib fetcher)
        """
        self.mainFile = mainFile
        self.settings = settings or appsettings
        self.registry = DirectiveRegistry(self.settings)
        self.resolver = ImportResolver(self.registry, self.settings)
        self.fetcher = fetcher or MetaFetcher(self.settings)
        self.registry.builtinDirectives_register(self.resolver, self.fetcher)

    def document_assemble(self) -> List[str]:
        """
        Resolve the entry file into the final list of lines

        Raises:
            SourceReadError: the entry file cannot be read
            ImportResolutionError: an import cannot be opened by any tier
            ImportCycleError: an import chain loops back on itself
            MetaFetchError: a meta fetch failed
        """
        try:
            content = Path(self.mainFile).read_bytes()
        except (OSError, ValueError) as e:
            raise SourceReadError(self.mainFile, str(e)) from e

        document = lines_split(content, path=self.mainFile, encoding=self.settings.encoding)
        LOG(f"Read {len(document.lines)} lines from {self.mainFile} "
            f"({document.newline.name} newlines)", level=2)

        lines = self.registry.lines_expand(document.lines, PathContext.root_create(self.mainFile))
        LOG(f"Assembled {len(lines)} lines", level=2)
        return lines

    def output_write(self, lines: List[str], outFile: str) -> Path:
        """
        Write lines to a newly created file, each followed by the terminator

        The terminator is the configured output newline, independent of
        the newline style of any input.

        Raises:
            OutputWriteError: the file cannot be created or written
        """
        output_file = Path(outFile)
        terminator = self.settings.output_newline
        try:
            with open(output_file, "w", encoding=self.settings.encoding,
                      errors="surrogateescape", newline="") as f:
                for line in lines:
                    f.write(line + terminator)
        except (OSError, ValueError) as e:
            raise OutputWriteError(outFile, str(e)) from e

        LOG(f"Wrote {output_file}", level=2)
        return output_file

    def build(self, outFile: str) -> Dict[str, Any]:
        """
        Assemble the project and write it to outFile

        Returns:
            dict with build results and statistics
        """
        lines = self.document_assemble()
        output_file = self.output_write(lines, outFile)
        return self.result_get(lines, output_file)

    def result_get(self, lines: List[str], output_file: Optional[Path] = None) -> Dict[str, Any]:
        """
        Build statistics for assembled lines

        status is True only once output_file has been written.
        """
        return {
            'status': output_file is not None,
            'output_file': str(output_file) if output_file is not None else None,
            'line_count': len(lines),
            'import_count': self.registry.counts[DirectiveKind.IMPORT],
            'meta_count': self.registry.counts[DirectiveKind.META],
        }
