"""
rayonix - Preprocessor for LibertyBasic and JustBasic projects

Assembles multiple BASIC source files into one file that runs unchanged
under JustBasic or LibertyBasic.
"""

__version__ = "1.0.0"

from .lib import Assembler, DirectiveRegistry, RayonixError, LOG, state_connectToLogger

__all__ = ["Assembler", "DirectiveRegistry", "RayonixError", "LOG", "state_connectToLogger", "__version__"]
