"""Dependency installation for generated projects.

Modules:
    fallback - ordered package-manager strategies (bun, then npm)
"""

from .fallback import FallbackInstaller, InstallAttempt, InstallResult

__all__ = [
    "FallbackInstaller",
    "InstallAttempt",
    "InstallResult",
]
