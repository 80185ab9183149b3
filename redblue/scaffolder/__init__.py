"""Red/Blue scaffolder -- composes projects from a base tree plus one feature.

Quick usage::

    from redblue.config import GeneratorConfig
    from redblue.models import GenerationRequest
    from redblue.scaffolder import Feature, ProjectGenerator

    request = GenerationRequest(
        project_name="my-app",
        personalization_name="Explorer",
        feature=Feature.RED,
    )
    generator = ProjectGenerator(GeneratorConfig())
    project = await generator.generate(request, Path.cwd() / "my-app")
"""

from redblue.models import Feature
from redblue.scaffolder.generator import GeneratedProject, ProjectGenerator
from redblue.scaffolder.templates import TemplateSet

__all__ = [
    "Feature",
    "GeneratedProject",
    "ProjectGenerator",
    "TemplateSet",
]
