"""
Project scaffolding

Creates a new project directory holding a starter entry file.
"""

from pathlib import Path
from typing import Optional

from .errors import ProjectInitError
from .log import LOG


TEMPLATE = (
    "'My new Rayonix project\r\n"
    "call main$\r\n"
    "\r\n"
    "sub main$\r\n"
    "\tprint \"Hello, Rayonix!\"\r\n"
    "end sub\r\n"
)


def project_initialize(projectName: str, mainFile: str, basedir: Optional[Path] = None) -> Path:
    """
    Create projectName/ with a template mainFile inside it

    Args:
        projectName: Name of the directory to create; must not exist yet
        mainFile: Name of the entry file written inside it
        basedir: Where to create the project (defaults to the working directory)

    Returns:
        Path of the written entry file

    Raises:
        ProjectInitError: the directory exists or cannot be created, or
            the entry file cannot be written
    """
    project_dir = (basedir or Path.cwd()) / projectName
    try:
        project_dir.mkdir()
        entry = project_dir / mainFile
        with open(entry, "w", encoding="utf-8", newline="") as f:
            f.write(TEMPLATE)
    except OSError as e:
        raise ProjectInitError(f"Cannot initialize project '{projectName}': {e}") from e

    LOG(f"Created {entry}", level=1)
    return entry
