"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from argparse import Namespace
from functools import reduce
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the build pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: op, mainFile, outFile, projectName, verbosity
        - env_check: envOK
        - source_assemble: assembler, assembledLines, buildResult (counts)
        - output_emit: buildResult (output_file, status)
        - results_report: (no additions, terminal stage)

    Attributes:
        op: Subcommand being run (build, init, doc, disclaimer)
        mainFile: Entry file of the project
        outFile: Output file for build
        projectName: Directory name for init
        verbosity: Logging verbosity level (1-3)
        envOK: Environment validation passed
        assembler: Assembler that resolved the document (rayonix.lib.Assembler)
        assembledLines: Final document lines, before writing
        buildResult: Build statistics and output location
    """

    # CLI arguments
    op: str = field(default="")
    mainFile: str = field(default="")
    outFile: str = field(default="")
    projectName: str = field(default="")
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    assembler: Optional[Any] = field(default=None)  # Assembler at runtime
    assembledLines: Optional[List[str]] = field(default=None)
    buildResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(cls: Type["ProgramState"], options: Namespace) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options that are not ProgramState fields are ignored.
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_assemble,
            output_emit,
            results_report
        )

    This is equivalent to:
        results_report(output_emit(source_assemble(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
