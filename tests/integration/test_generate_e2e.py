"""Integration tests for the full generate flow.

These run the real pipeline against the shipped SvelteKit template set and
real subprocesses.  The package managers are replaced by small Python
commands so no network access or Node toolchain is needed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from redblue.config import GeneratorConfig, InstallerConfig
from redblue.errors import InstallError
from redblue.models import Feature
from redblue.pipeline import Pipeline


def _python_installer(name: str, code: str) -> InstallerConfig:
    return InstallerConfig(name=name, command=[sys.executable, "-c", code])


MARK_INSTALLED = "import pathlib; pathlib.Path('installed-by.txt').write_text('{name}')"


@pytest.mark.integration
class TestShippedTemplates:
    @pytest.mark.parametrize("feature", list(Feature))
    @pytest.mark.asyncio
    async def test_generate_each_feature(
        self, workdir: Path, scripted_prompter, expected_files, feature
    ):
        config = GeneratorConfig(skip_install=True)
        prompter = scripted_prompter(["matrix", "Neo", feature.value])

        assert await Pipeline(config, cwd=workdir, prompter=prompter).run() == 0

        target = workdir / "matrix"
        files = {
            p.relative_to(target).as_posix() for p in target.rglob("*") if p.is_file()
        }
        expected = expected_files(config.templates_dir, feature.value) | {".env"}
        assert files == expected

        other = Feature.BLUE if feature is Feature.RED else Feature.RED
        other_component = f"src/lib/{other.value.capitalize()}Pill.svelte"
        assert other_component not in files
        assert f"src/lib/{feature.value.capitalize()}Pill.svelte" in files

        manifest = json.loads((target / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "matrix"
        assert manifest["scripts"]["dev"] == "vite dev"
        assert (target / ".env").read_text(encoding="utf-8") == "PUBLIC_USER_NAME=Neo\n"

    @pytest.mark.asyncio
    async def test_page_comes_from_feature(self, workdir: Path, scripted_prompter):
        config = GeneratorConfig(skip_install=True)
        prompter = scripted_prompter(["matrix", "Neo", "red"])
        await Pipeline(config, cwd=workdir, prompter=prompter).run()

        page = (workdir / "matrix" / "src" / "routes" / "+page.svelte").read_text(encoding="utf-8")
        assert "RedPill" in page


@pytest.mark.integration
class TestRealInstallers:
    @pytest.mark.asyncio
    async def test_primary_runs_in_project(self, config: GeneratorConfig, workdir, scripted_prompter):
        config = config.model_copy(
            update={
                "skip_install": False,
                "installers": [_python_installer("first", MARK_INSTALLED.format(name="first"))],
            }
        )
        prompter = scripted_prompter(["app", "me", "blue"])
        assert await Pipeline(config, cwd=workdir, prompter=prompter).run() == 0
        assert (workdir / "app" / "installed-by.txt").read_text() == "first"

    @pytest.mark.asyncio
    async def test_failing_primary_falls_back(self, config: GeneratorConfig, workdir, scripted_prompter):
        config = config.model_copy(
            update={
                "skip_install": False,
                "installers": [
                    _python_installer("first", "raise SystemExit(3)"),
                    _python_installer("second", MARK_INSTALLED.format(name="second")),
                ],
            }
        )
        prompter = scripted_prompter(["app", "me", "red"])
        assert await Pipeline(config, cwd=workdir, prompter=prompter).run() == 0
        assert (workdir / "app" / "installed-by.txt").read_text() == "second"

    @pytest.mark.asyncio
    async def test_missing_binary_falls_back(self, config: GeneratorConfig, workdir, scripted_prompter):
        config = config.model_copy(
            update={
                "skip_install": False,
                "installers": [
                    InstallerConfig.for_binary("redblue-no-such-package-manager"),
                    _python_installer("second", MARK_INSTALLED.format(name="second")),
                ],
            }
        )
        prompter = scripted_prompter(["app", "me", "red"])
        assert await Pipeline(config, cwd=workdir, prompter=prompter).run() == 0
        assert (workdir / "app" / "installed-by.txt").read_text() == "second"

    @pytest.mark.asyncio
    async def test_all_fail(self, config: GeneratorConfig, workdir, scripted_prompter):
        config = config.model_copy(
            update={
                "skip_install": False,
                "installers": [
                    _python_installer("first", "raise SystemExit(1)"),
                    _python_installer("second", "raise SystemExit(2)"),
                ],
            }
        )
        prompter = scripted_prompter(["app", "me", "red"])
        with pytest.raises(InstallError) as exc_info:
            await Pipeline(config, cwd=workdir, prompter=prompter).run()
        assert [a.exit_code for a in exc_info.value.attempts] == [1, 2]
        # Generation itself completed before installation was attempted.
        assert (workdir / "app" / "package.json").exists()
