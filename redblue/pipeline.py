"""Red/Blue Generator pipeline.

Runs the single-pass generation flow:

Collect   -- ask for project name, personalization name and feature.
Resolve   -- compute ``<cwd>/<project name>`` and refuse an existing path.
Compose   -- copy the base template, then overlay the chosen feature.
Personalize / Patch -- write ``.env`` and set the manifest name.
Install   -- run the package manager, falling back to the next one.

Usage::

    redblue
    python -m redblue
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from redblue import __version__
from redblue.config import GeneratorConfig
from redblue.errors import DestinationExistsError, GeneratorError, InstallError
from redblue.installer import FallbackInstaller, InstallResult
from redblue.models import GenerationRequest
from redblue.prompts import PromptCancelled, Prompter, RichPrompter, collect_request
from redblue.scaffolder import GeneratedProject, ProjectGenerator
from redblue.utils import (
    console,
    print_banner,
    print_error,
    print_step,
    print_success,
    print_summary_table,
)


def resolve_target(cwd: str | Path, project_name: str) -> Path:
    """Return the absolute project directory for *project_name* under *cwd*.

    Raises:
        DestinationExistsError: If anything already exists at that path.
    """
    target = Path(cwd).absolute() / project_name
    if target.exists() or target.is_symlink():
        raise DestinationExistsError(target)
    return target


class Pipeline:
    """Drives one generation run.

    The working directory and the prompter are injected so the whole flow can
    run against a temporary directory with scripted answers.

    Attributes:
        config: Generator configuration.
        cwd: Directory the project folder is created in.
        prompter: Source of the interactive answers.
        generator: Template composer.
        installer: Dependency installer.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        cwd: str | Path,
        prompter: Prompter,
        generator: ProjectGenerator | None = None,
        installer: FallbackInstaller | None = None,
    ) -> None:
        self.config = config
        self.cwd = Path(cwd)
        self.prompter = prompter
        self.generator = generator or ProjectGenerator(config)
        self.installer = installer or FallbackInstaller(config.installers)

    async def run(self) -> int:
        """Run the pipeline and return the process exit status.

        Returns ``0`` on success, on cancellation, and when an answer is
        missing.

        Raises:
            DestinationExistsError: If the project directory already exists.
            GeneratorError: If composing, patching or installing fails.
        """
        print_banner()

        try:
            request = collect_request(self.prompter, self.config)
        except PromptCancelled:
            console.print("\nCancelled.\n")
            return 0

        if request is None:
            console.print("[dim]Nothing to generate.[/dim]")
            return 0

        target = resolve_target(self.cwd, request.project_name)

        print_step(f"📁 Creating project in ./{request.project_name}...")
        project = await self.generator.generate(request, target)

        install: InstallResult | None = None
        if self.config.skip_install:
            console.print("[dim]Skipping dependency installation.[/dim]")
        else:
            print_step("📦 Installing dependencies...")
            try:
                install = await self.installer.install(project.root)
            except InstallError:
                print_error("❌ Dependency installation failed.")
                raise

        self._report(request, project, install)
        return 0

    def _report(
        self,
        request: GenerationRequest,
        project: GeneratedProject,
        install: InstallResult | None,
    ) -> None:
        runner = install.method if install else self.config.installers[0].name
        console.print()
        print_summary_table(
            {
                "Project": project.manifest_name,
                "Feature": request.feature.label,
                "Location": str(project.root),
                "Files": str(len(project.files)),
                "Installer": install.method if install else "skipped",
            },
            title="Generated Project",
        )
        print_success("✨ Done! Your project is ready.")
        console.print()
        console.print(f"   cd {request.project_name}")
        console.print(f"   {runner} run dev")
        console.print()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """CLI entry point for ``redblue`` and ``python -m redblue``."""
    parser = argparse.ArgumentParser(
        prog="redblue",
        description="Red/Blue Generator -- scaffold a project with a red or blue pill",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "All input is gathered interactively.\n"
            "Environment: REDBLUE_TEMPLATES_DIR, REDBLUE_INSTALLERS,\n"
            "             REDBLUE_SKIP_INSTALL, REDBLUE_CLEANUP_ON_FAILURE\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args()

    config = GeneratorConfig.from_env()
    pipeline = Pipeline(config, cwd=Path.cwd(), prompter=RichPrompter())

    try:
        code = asyncio.run(pipeline.run())
    except DestinationExistsError as exc:
        print_error(f"\n❌ {exc}\n")
        sys.exit(exc.exit_code)
    except GeneratorError as exc:
        print_error(f"Error: {exc}")
        sys.exit(exc.exit_code)

    sys.exit(code)


if __name__ == "__main__":
    main()
