"""Red/Blue Generator configuration.

Centralised, typed configuration for the scaffolding pipeline. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

_TRUTHY = {"1", "true", "yes", "on"}


class InstallerConfig(BaseModel):
    """A single package-manager install strategy."""

    name: str = Field(..., min_length=1, description="Package manager binary, e.g. ``bun``")
    command: list[str] = Field(..., min_length=1, description="Full argv run in the target")

    @classmethod
    def for_binary(cls, name: str) -> "InstallerConfig":
        """Build the conventional ``<name> install`` strategy."""
        return cls(name=name, command=[name, "install"])


def _default_installers() -> list[InstallerConfig]:
    return [InstallerConfig.for_binary("bun"), InstallerConfig.for_binary("npm")]


class GeneratorConfig(BaseModel):
    """Global Red/Blue Generator configuration.

    Instances are typically created once by the CLI entry point and then
    passed through the pipeline stages.
    """

    templates_dir: Path = Field(default=_DEFAULT_TEMPLATES_DIR)
    env_file: str = Field(default=".env")
    env_key: str = Field(default="PUBLIC_USER_NAME", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    manifest_file: str = Field(default="package.json")
    manifest_indent: str = Field(default="\t")
    gitignore_placeholder: str = Field(default="_gitignore")
    installers: list[InstallerConfig] = Field(
        default_factory=_default_installers,
        min_length=1,
        max_length=3,
        description="Install strategies tried in order until one succeeds",
    )
    skip_install: bool = Field(default=False)
    cleanup_on_failure: bool = Field(
        default=False, description="Remove the partially generated target when a stage fails"
    )
    default_project_name: str = Field(default="my-app")
    default_user_name: str = Field(default="Explorer")

    @field_validator("installers")
    @classmethod
    def _unique_installers(cls, value: list[InstallerConfig]) -> list[InstallerConfig]:
        names = [installer.name for installer in value]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate installer names: {names}")
        return value

    # ------------------------------------------------------------------
    # Derived names (read-only properties)
    # ------------------------------------------------------------------

    @property
    def gitignore_name(self) -> str:
        """Conventional dotted name the placeholder is renamed to."""
        return "." + self.gitignore_placeholder.lstrip("_.")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            REDBLUE_TEMPLATES_DIR, REDBLUE_INSTALLERS, REDBLUE_SKIP_INSTALL,
            REDBLUE_CLEANUP_ON_FAILURE.

        ``REDBLUE_INSTALLERS`` is a comma-separated list of package-manager
        binaries, each invoked as ``<name> install``.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("REDBLUE_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["REDBLUE_TEMPLATES_DIR"])
        if os.environ.get("REDBLUE_INSTALLERS"):
            names = [n.strip() for n in os.environ["REDBLUE_INSTALLERS"].split(",") if n.strip()]
            kwargs["installers"] = [InstallerConfig.for_binary(n) for n in names]
        if os.environ.get("REDBLUE_SKIP_INSTALL"):
            kwargs["skip_install"] = os.environ["REDBLUE_SKIP_INSTALL"].strip().lower() in _TRUTHY
        if os.environ.get("REDBLUE_CLEANUP_ON_FAILURE"):
            kwargs["cleanup_on_failure"] = (
                os.environ["REDBLUE_CLEANUP_ON_FAILURE"].strip().lower() in _TRUTHY
            )
        return cls(**kwargs)
