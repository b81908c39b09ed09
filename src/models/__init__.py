"""
Models package for rayonix

Contains data structures and type definitions for the build pipeline.
"""

from .state import ProgramState, pipeline
from .directives import Directive, DirectiveKind, DirectiveSpec
from .document import NewlineStyle, SourceDocument, PathContext

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "DirectiveKind",
    "DirectiveSpec",
    "NewlineStyle",
    "SourceDocument",
    "PathContext",
]
