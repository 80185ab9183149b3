"""Main scaffolding orchestrator.

Takes a :class:`GenerationRequest` and materialises the project directory:
the base template tree, exactly one feature overlay on top of it, the
personalization env file, and the manifest patched with the project name.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from redblue.config import GeneratorConfig
from redblue.errors import DestinationExistsError, ManifestError
from redblue.models import Feature, GenerationRequest
from redblue.utils import list_files, load_json, print_warning, save_json

from .templates import TemplateSet


@dataclass
class GeneratedProject:
    """Description of a project directory produced by :class:`ProjectGenerator`."""

    root: Path
    feature: Feature
    manifest_name: str
    files: list[str] = field(default_factory=list)


class ProjectGenerator:
    """Composes a project from a template set.

    Stages run strictly in order, each finishing its filesystem writes before
    the next begins:

    1. copy the base tree (creates the target)
    2. rename the ignore-list placeholder
    3. overlay the selected feature tree
    4. write the personalization env file
    5. patch the manifest name
    """

    def __init__(self, config: GeneratorConfig, templates: TemplateSet | None = None) -> None:
        self.config = config
        self.templates = templates or TemplateSet(config.templates_dir)

    # -- Public API --------------------------------------------------------

    async def generate(self, request: GenerationRequest, target: str | Path) -> GeneratedProject:
        """Generate the project for *request* at *target*.

        *target* must not exist yet.  When a stage fails and
        ``cleanup_on_failure`` is set, the partially written target is removed
        before the error propagates.

        Raises:
            DestinationExistsError: If *target* already exists.
            TemplateError: If the base or selected feature tree is missing.
            ManifestError: If the copied manifest is missing or malformed.
        """
        target = Path(target)
        if target.exists():
            raise DestinationExistsError(target)

        # Resolve both trees before the first write.
        base = self.templates.base_tree()
        overlay = self.templates.feature_tree(request.feature)

        try:
            await self.copy_base(base, target)
            await self.overlay_feature(overlay, target)
            await self.write_env_file(target, request.personalization_name)
            manifest_name = await self.patch_manifest(target, request.project_name)
        except Exception:
            if self.config.cleanup_on_failure and target.exists():
                print_warning(f"Removing partially generated project: {target}")
                await asyncio.to_thread(shutil.rmtree, target, True)
            raise

        files = await asyncio.to_thread(list_files, target)
        return GeneratedProject(
            root=target,
            feature=request.feature,
            manifest_name=manifest_name,
            files=files,
        )

    # -- Template composition ----------------------------------------------

    async def copy_base(self, base: Path, target: Path) -> None:
        """Copy the base tree into the (not yet existing) *target*."""
        await asyncio.to_thread(shutil.copytree, base, target)
        await asyncio.to_thread(self._rename_placeholder, target)

    async def overlay_feature(self, overlay: Path, target: Path) -> None:
        """Copy *overlay* over *target*, replacing files at colliding paths."""
        await asyncio.to_thread(shutil.copytree, overlay, target, dirs_exist_ok=True)
        # An overlay may ship its own placeholder; it wins over the base one.
        await asyncio.to_thread(self._rename_placeholder, target)

    def _rename_placeholder(self, target: Path) -> None:
        placeholder = target / self.config.gitignore_placeholder
        if placeholder.is_file():
            placeholder.replace(target / self.config.gitignore_name)

    # -- Personalization ---------------------------------------------------

    async def write_env_file(self, target: Path, personalization_name: str) -> Path:
        """Write ``KEY=value`` to the env file at the project root.

        The value is written verbatim.
        """
        env_path = target / self.config.env_file
        content = f"{self.config.env_key}={personalization_name}\n"
        await asyncio.to_thread(env_path.write_text, content, "utf-8")
        return env_path

    # -- Manifest ----------------------------------------------------------

    async def patch_manifest(self, target: Path, project_name: str) -> str:
        """Set the manifest's top-level ``name`` to *project_name*.

        Every other field is written back unchanged, in its original order.

        Returns:
            The name written to the manifest.
        """
        manifest_path = target / self.config.manifest_file
        manifest = await asyncio.to_thread(_read_manifest, manifest_path)
        manifest["name"] = project_name
        await asyncio.to_thread(
            save_json, manifest, manifest_path, self.config.manifest_indent
        )
        return project_name


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        data = load_json(path)
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Manifest is not valid JSON: {path} ({exc})") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest top level must be an object: {path}")
    return data
