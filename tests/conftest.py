"""Shared pytest fixtures for the Red/Blue Generator test suite.

Provides reusable fixtures for:
- A small on-disk template set (base + red + blue)
- A working directory the pipeline creates projects in
- A scripted prompter standing in for the terminal
- Mock subprocess helpers for the installer
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from redblue.config import GeneratorConfig, InstallerConfig
from redblue.utils import list_files


# ---------------------------------------------------------------------------
# Template set
# ---------------------------------------------------------------------------

SAMPLE_MANIFEST: dict[str, Any] = {
    "name": "template",
    "version": "0.0.1",
    "private": True,
    "scripts": {"dev": "vite dev", "build": "vite build"},
    "devDependencies": {"svelte": "^5.0.0", "vite": "^5.0.3"},
}

BASE_FILES: dict[str, str] = {
    "_gitignore": "node_modules\n.env\n",
    "README.md": "# base\n",
    "src/app.html": "<html>%sveltekit.body%</html>\n",
    "src/routes/+page.svelte": "<h1>base page</h1>\n",
}

FEATURE_FILES: dict[str, dict[str, str]] = {
    "red": {
        "src/routes/+page.svelte": "<h1>red page</h1>\n",
        "src/lib/RedPill.svelte": "<p>red</p>\n",
        "red-only.txt": "red\n",
    },
    "blue": {
        "src/routes/+page.svelte": "<h1>blue page</h1>\n",
        "src/lib/BluePill.svelte": "<p>blue</p>\n",
        "blue-only.txt": "blue\n",
    },
}


def _write_tree(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template set with a base tree and red/blue overlays."""
    root = tmp_path / "templates"
    _write_tree(root / "base", BASE_FILES)
    (root / "base" / "package.json").write_text(
        json.dumps(SAMPLE_MANIFEST, indent=2), encoding="utf-8"
    )
    for feature, files in FEATURE_FILES.items():
        _write_tree(root / "features" / feature, files)
    return root


def _expected_files(
    root: Path, feature: str, placeholder: str = "_gitignore", dotted: str = ".gitignore"
) -> set[str]:
    union = set(list_files(root / "base")) | set(list_files(root / "features" / feature))
    if placeholder in union:
        union.discard(placeholder)
        union.add(dotted)
    return union


@pytest.fixture
def expected_files():
    """Factory for the file set a project generated from a template set must hold.

    The union of the base and overlay files, with the ignore-list placeholder
    reported under its dotted name.
    """
    return _expected_files


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """The directory generated projects are created in."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(template_root: Path) -> GeneratorConfig:
    """Generator config pointing at the sample template set, install skipped."""
    return GeneratorConfig(templates_dir=template_root, skip_install=True)


@pytest.fixture
def install_config(template_root: Path) -> GeneratorConfig:
    """Generator config that runs the (mocked) installers."""
    return GeneratorConfig(
        templates_dir=template_root,
        installers=[InstallerConfig.for_binary("bun"), InstallerConfig.for_binary("npm")],
    )


# ---------------------------------------------------------------------------
# Scripted prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Answers questions from a fixed script.

    Script entries that are exceptions (or exception classes) are raised
    instead of returned.  Running past the end of the script raises
    ``EOFError``, as a closed terminal would.
    """

    def __init__(self, answers: list[Any]) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []
        self.calls: list[dict[str, Any]] = []

    def ask(self, question, *, default=None, choices=None):
        self.questions.append(question)
        self.calls.append({"question": question, "default": default, "choices": choices})
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException) or (
            isinstance(answer, type) and issubclass(answer, BaseException)
        ):
            raise answer
        if answer is None:
            return default or ""
        return answer


@pytest.fixture
def scripted_prompter():
    """Factory for :class:`ScriptedPrompter` instances."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Mock subprocess helpers
# ---------------------------------------------------------------------------


def make_process(returncode: int) -> MagicMock:
    """Build a mock asyncio subprocess whose ``wait()`` returns *returncode*."""
    process = MagicMock()
    process.returncode = returncode
    process.wait = AsyncMock(return_value=returncode)
    return process


@pytest.fixture
def mock_process():
    """Factory for mock asyncio subprocesses."""
    return make_process


@pytest.fixture
def installers_on_path():
    """Make every installer binary resolve to its bare name on PATH."""
    with patch("shutil.which", side_effect=lambda name: name) as mock_which:
        yield mock_which


@pytest.fixture
def sample_manifest() -> dict[str, Any]:
    """The manifest shipped in the sample base tree."""
    return json.loads(json.dumps(SAMPLE_MANIFEST))
