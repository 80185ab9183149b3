"""Exceptions raised by the generator pipeline.

Each error carries the process exit status the CLI should terminate with.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from redblue.installer.fallback import InstallAttempt


class GeneratorError(Exception):
    """Base class for failures the CLI reports with a clean message."""

    exit_code: int = 2


class DestinationExistsError(GeneratorError):
    """Raised when the resolved target directory is already present."""

    exit_code = 1

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f'Directory "{self.path.name}" already exists.')


class TemplateError(GeneratorError):
    """Raised when the template set is missing a required tree."""


class ManifestError(GeneratorError):
    """Raised when the generated manifest cannot be read or patched."""


class InstallError(GeneratorError):
    """Raised when every install strategy has failed."""

    def __init__(self, attempts: list["InstallAttempt"]) -> None:
        self.attempts = list(attempts)
        tried = ", ".join(a.name for a in self.attempts) or "none"
        super().__init__(f"Dependency installation failed (tried: {tried}).")
