#!/usr/bin/env python3
"""
rayonix - Preprocessor for LibertyBasic and JustBasic projects

Flattens a multi-file BASIC project into one file that an unmodified
JustBasic or LibertyBasic interpreter can run.

In-file directives (comment lines, so the sources stay valid BASIC):
    '!rayonix import relative/path/to/file.bas
    '!rayonix import /absolute/path/to/file.bas
    '!rayonix meta http://www.example.com/file.bas

Usage:
    rayonix init <projectName> <mainFile.bas>
    rayonix build <mainFile.bas> <outFile.bas>
    rayonix doc
    rayonix disclaimer

Examples:
    # Start a project and build it
    rayonix init hello main.bas
    rayonix build hello/main.bas hello.bas

    # Verbose build, showing every resolution attempt
    rayonix -vv build main.bas out.bas
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import List, Optional

from loguru import logger

from .lib import Assembler, RayonixError, ImportResolutionError, __version__, LOG, state_connectToLogger
from .lib.project import project_initialize
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  ____                              _
 |  _ \ __ _ _   _  ___  _ __  (_)_  __
 | |_) / _` | | | |/ _ \| '_ \ | \ \/ /
 |  _ < (_| | |_| | (_) | | | || |>  <
 |_| \_\__,_|\__, |\___/|_| |_||_/_/\_\
             |___/
  Preprocessor for LibertyBasic and JustBasic
"""

DISCLAIMER = f"""
Rayonix
v{__version__}

This program is free software; you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation; either version 2 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program; if not, write to the Free Software
Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
MA 02110-1301, USA.
"""

DOCUMENTATION = """
Rayonix
v{version}
Distributed under the GNU General Public License.

# About

Rayonix is a JustBasic/LibertyBasic compatible build system. It
assembles multiple files into one file, which makes it great for
large projects. The output still runs with JustBasic or LibertyBasic.

Rayonix is not made by nor endorsed by Shoptalk Systems, the copyright
owner of LibertyBasic and JustBasic.

## In-file Flags

Flags are written as comments:
{flags}

Imported files may import further files. Relative imports are looked
up as given, then under the main file's folder, then under the folder
of the file containing the flag. Meta content is included as-is.

All imported and fetched code is placed after the main file's own code.

## Building

  rayonix build inFile.bas outFile.bas

This builds inFile.bas, resolving all in-file flags. The resulting
outFile.bas can be run with JustBasic or LibertyBasic.
"""

# Define CLI arguments
parser = ArgumentParser(
    prog="rayonix",
    description="rayonix - Preprocessor for LibertyBasic and JustBasic",
    formatter_class=RawDescriptionHelpFormatter,
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

subparsers = parser.add_subparsers(dest="op", metavar="<option>")

parser_init = subparsers.add_parser("init", help="initializes a new rayonix project template")
parser_init.add_argument("projectName", help="Directory to create for the project")
parser_init.add_argument("mainFile", help="Name of the main .bas file inside the project")

parser_build = subparsers.add_parser("build", help="builds the rayonix project")
parser_build.add_argument("mainFile", help="Main .bas file of the project")
parser_build.add_argument("outFile", help="Single .bas file to write")

subparsers.add_parser("doc", help="displays documentation")
subparsers.add_parser("disclaimer", help="displays disclaimer")


def documentation_render() -> str:
    """Documentation text, listing the flags the directive registry knows"""
    flags = Assembler("").registry.flags_describe()
    return DOCUMENTATION.format(version=__version__, flags="\n".join(flags))


def error_report(error: RayonixError) -> None:
    """
    Log a fatal build error, with its diagnostic trail, and exit.

    Exits:
        1 always
    """
    logger.error(str(error))
    if isinstance(error, ImportResolutionError):
        for line in error.trail_format():
            logger.error(line)
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate that the entry file exists and the output can be placed.

    Exits:
        1 if the main file is missing or the output directory does not exist
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if not Path(state.mainFile).is_file():
        logger.error(f"Main file not found: {state.mainFile}")
        state.envOK = False
        sys.exit(1)

    out_dir = Path(state.outFile).parent
    if not out_dir.is_dir():
        logger.error(f"Output directory not found: {out_dir}")
        state.envOK = False
        sys.exit(1)

    LOG(f"Main file: {state.mainFile}", level=2)
    LOG(f"Output file: {state.outFile}", level=2)
    state.envOK = True
    return state


def source_assemble(inputstate: ProgramState) -> ProgramState:
    """
    Resolve every directive reachable from the main file.

    Returns:
        ProgramState with assembler, assembledLines and buildResult counts

    Exits:
        1 on any resolution or fetch error; nothing is written
    """
    state = inputstate.copy()

    LOG(f"Assembling {state.mainFile}...", level=1)
    assembler = Assembler(state.mainFile)
    try:
        state.assembledLines = assembler.document_assemble()
    except RayonixError as e:
        error_report(e)

    state.assembler = assembler
    state.buildResult = assembler.result_get(state.assembledLines)
    return state


def output_emit(inputstate: ProgramState) -> ProgramState:
    """
    Write the assembled document to the output file.

    Exits:
        1 if there is nothing to write or the write fails
    """
    state = inputstate.copy()

    if state.assembler is None or state.assembledLines is None:
        logger.error("No assembled document available")
        sys.exit(1)

    try:
        output_file = state.assembler.output_write(state.assembledLines, state.outFile)
    except RayonixError as e:
        error_report(e)

    state.buildResult = state.assembler.result_get(state.assembledLines, output_file)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display build results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    if not state.buildResult or not state.buildResult.get('status'):
        logger.error("Build failed")
        sys.exit(1)

    LOG("Build successful!", level=1)
    LOG(f"  Output:  {state.buildResult['output_file']}", level=1)
    LOG(f"  Lines:   {state.buildResult['line_count']}", level=1)
    LOG(f"  Imports: {state.buildResult['import_count']}", level=2)
    LOG(f"  Metas:   {state.buildResult['meta_count']}", level=2)
    return state


def project_init(inputstate: ProgramState) -> ProgramState:
    """
    Create a new project skeleton.

    Exits:
        1 if the project cannot be created
    """
    state = inputstate.copy()
    try:
        entry = project_initialize(state.projectName, state.mainFile)
    except RayonixError as e:
        error_report(e)
    LOG(f"Build it with: rayonix build {entry} out.bas", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - dispatch the requested option.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Exits:
        1 on usage errors and on any fatal build error
    """
    options: Namespace = parser.parse_args(argv)

    if options.op is None:
        parser.print_help()
        sys.exit(1)

    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    if state.op == "build":
        pipeline(state, env_check, source_assemble, output_emit, results_report)
    elif state.op == "init":
        pipeline(state, project_init)
    elif state.op == "doc":
        print(documentation_render())
    elif state.op == "disclaimer":
        print(DISCLAIMER)


if __name__ == "__main__":
    main()
