"""Fallback strategy management for dependency installation.

Implements the bun -> npm chain:
1. Run ``bun install`` in the generated project
2. If it exits non-zero or ``bun`` is not on PATH, run ``npm install``
3. If every strategy fails, raise :class:`InstallError`

The strategy list comes from :class:`GeneratorConfig` and is walked exactly
once; there is no retry of a strategy that already failed.  Attempt history is
tracked for reporting.
"""

from __future__ import annotations

import asyncio
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from redblue.config import InstallerConfig
from redblue.errors import InstallError
from redblue.utils import console, print_warning


@dataclass
class InstallAttempt:
    """Record of a single install attempt."""

    name: str
    command: list[str]
    started_at: str
    duration_seconds: float
    exit_code: int | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass
class InstallResult:
    """Final result from the fallback-aware installer."""

    success: bool
    method: str
    attempts: list[InstallAttempt] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    def summary(self) -> str:
        """Return a human-readable summary of the install result."""
        status = "SUCCESS" if self.success else "FAILED"
        lines = [
            f"Status: {status}",
            f"Method: {self.method}",
            f"Attempts: {len(self.attempts)}",
            f"Total Duration: {self.total_duration_seconds:.1f}s",
        ]
        for attempt in self.attempts:
            outcome = "ok" if attempt.success else (attempt.error or f"exit {attempt.exit_code}")
            lines.append(f"  - {' '.join(attempt.command)}: {outcome}")
        return "\n".join(lines)


class FallbackInstaller:
    """Runs install strategies in order until one succeeds.

    Each command runs with the project as its working directory and inherits
    the parent's stdin/stdout/stderr, so package-manager output is shown live.
    The process is awaited without a timeout.
    """

    def __init__(self, strategies: list[InstallerConfig]) -> None:
        if not strategies:
            raise ValueError("at least one install strategy is required")
        self.strategies = list(strategies)

    async def install(self, project_dir: str | Path) -> InstallResult:
        """Install dependencies in *project_dir*.

        Returns:
            The result naming the strategy that succeeded.

        Raises:
            InstallError: If every strategy failed.  The exception carries the
                attempt history.
        """
        cwd = Path(project_dir)
        attempts: list[InstallAttempt] = []
        start = time.monotonic()

        for index, strategy in enumerate(self.strategies):
            if index > 0:
                previous = attempts[-1]
                print_warning(
                    f"{previous.name} install failed "
                    f"({previous.error or f'exit {previous.exit_code}'}); "
                    f"falling back to {strategy.name}"
                )
            attempt = await self._run(strategy, cwd)
            attempts.append(attempt)
            if attempt.success:
                return InstallResult(
                    success=True,
                    method=strategy.name,
                    attempts=attempts,
                    total_duration_seconds=time.monotonic() - start,
                )

        raise InstallError(attempts)

    async def _run(self, strategy: InstallerConfig, cwd: Path) -> InstallAttempt:
        started_at = datetime.now(timezone.utc).isoformat()
        start = time.monotonic()
        console.print(f"[dim]$ {' '.join(strategy.command)}[/dim]")

        # Resolve through PATH (and PATHEXT on Windows, where npm is npm.cmd).
        executable = shutil.which(strategy.command[0])
        try:
            if executable is None:
                raise FileNotFoundError(strategy.command[0])
            process = await asyncio.create_subprocess_exec(
                executable, *strategy.command[1:], cwd=str(cwd)
            )
        except FileNotFoundError:
            return InstallAttempt(
                name=strategy.name,
                command=strategy.command,
                started_at=started_at,
                duration_seconds=time.monotonic() - start,
                error=f"command not found: '{strategy.command[0]}'",
            )
        except PermissionError:
            return InstallAttempt(
                name=strategy.name,
                command=strategy.command,
                started_at=started_at,
                duration_seconds=time.monotonic() - start,
                error=f"permission denied executing: '{strategy.command[0]}'",
            )

        exit_code = await process.wait()
        return InstallAttempt(
            name=strategy.name,
            command=strategy.command,
            started_at=started_at,
            duration_seconds=time.monotonic() - start,
            exit_code=exit_code,
        )
