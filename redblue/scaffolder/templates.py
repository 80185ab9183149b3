"""Template set discovery for project scaffolding.

A template set is a read-only directory holding one ``base/`` tree, copied into
every generated project, and one overlay tree per :class:`Feature` under
``features/``.  Overlay trees are looked up through a closed mapping built from
the enum, so user input never becomes part of a filesystem path.
"""

from __future__ import annotations

from pathlib import Path

from redblue.errors import TemplateError
from redblue.models import Feature
from redblue.utils import list_files


# ---------------------------------------------------------------------------
# TemplateSet
# ---------------------------------------------------------------------------


class TemplateSet:
    """Handle on a ``base/`` + ``features/<feature>/`` template directory.

    The template set is never written to.  Missing trees are reported by
    :meth:`validate` (and lazily by the accessors) as :class:`TemplateError`.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.base = self.root / "base"
        self._features: dict[Feature, Path] = {
            feature: self.root / "features" / dir_name
            for feature, dir_name in _FEATURE_DIRS.items()
        }

    def feature_tree(self, feature: Feature) -> Path:
        """Return the overlay tree for *feature*.

        Raises:
            TemplateError: If *feature* is not a known :class:`Feature` or its
                tree is missing.
        """
        try:
            tree = self._features[Feature(feature)]
        except (KeyError, ValueError) as exc:
            raise TemplateError(f"Unknown feature: {feature!r}") from exc
        if not tree.is_dir():
            raise TemplateError(f"Feature template not found: {tree}")
        return tree

    def base_tree(self) -> Path:
        """Return the base tree, raising :class:`TemplateError` if missing."""
        if not self.base.is_dir():
            raise TemplateError(f"Base template not found: {self.base}")
        return self.base

    def validate(self) -> None:
        """Check that the base tree and every feature tree exist."""
        self.base_tree()
        for feature in Feature:
            self.feature_tree(feature)

    def files(self, tree: Path) -> list[str]:
        """List the files of one tree of this set, relative to that tree."""
        return list_files(tree)


_FEATURE_DIRS: dict[Feature, str] = {
    Feature.RED: "red",
    Feature.BLUE: "blue",
}
