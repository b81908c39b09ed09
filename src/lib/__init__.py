"""
rayonix - Preprocessor for LibertyBasic and JustBasic projects

Flattens a multi-file project into one file by resolving in-file
'!rayonix import and '!rayonix meta directives.
"""

__version__ = "1.0.0"

from .assembler import Assembler
from .directives import DirectiveRegistry, directive_parse
from .errors import (
    RayonixError,
    ImportResolutionError,
    ImportCycleError,
    MetaFetchError,
    OutputWriteError,
    ProjectInitError,
    SourceReadError,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "Assembler",
    "DirectiveRegistry",
    "directive_parse",
    "RayonixError",
    "ImportResolutionError",
    "ImportCycleError",
    "MetaFetchError",
    "OutputWriteError",
    "ProjectInitError",
    "SourceReadError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
