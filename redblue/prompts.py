"""Interactive input collection.

Asks the three questions a generation needs (project name, personalization
name, feature) and turns the answers into a :class:`GenerationRequest`.  The
questions are asked through a :class:`Prompter` so tests can script the
answers without a terminal.
"""

from __future__ import annotations

from typing import Protocol

from rich.prompt import Prompt

from redblue.config import GeneratorConfig
from redblue.models import Feature, GenerationRequest, is_valid_project_name
from redblue.utils import console, print_warning


class PromptCancelled(Exception):
    """Raised when the user interrupts any of the questions."""


# ---------------------------------------------------------------------------
# Prompters
# ---------------------------------------------------------------------------


class Prompter(Protocol):
    """Anything that can ask a question and return the raw answer."""

    def ask(
        self,
        question: str,
        *,
        default: str | None = None,
        choices: list[str] | None = None,
    ) -> str: ...


class RichPrompter:
    """Asks questions on the terminal with :class:`rich.prompt.Prompt`.

    Choices are matched case-insensitively and returned in their listed form.
    """

    def ask(
        self,
        question: str,
        *,
        default: str | None = None,
        choices: list[str] | None = None,
    ) -> str:
        options = {
            "console": console,
            "choices": choices,
            "case_sensitive": False,
            "show_choices": False,
        }
        if default is None:
            return Prompt.ask(question, **options)
        return Prompt.ask(question, default=default, **options)


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


def _ask(prompter: Prompter, question: str, *, strip: bool = True, **kwargs) -> str:
    try:
        answer = prompter.ask(question, **kwargs)
    except (KeyboardInterrupt, EOFError) as exc:
        raise PromptCancelled() from exc
    answer = answer or ""
    return answer.strip() if strip else answer


def _ask_project_name(prompter: Prompter, config: GeneratorConfig) -> str:
    while True:
        name = _ask(prompter, "Project name", default=config.default_project_name)
        if not name or is_valid_project_name(name):
            return name
        print_warning(f"Invalid project name: {name!r} (use a single directory name)")


def _ask_feature(prompter: Prompter) -> Feature | None:
    features = list(Feature)
    by_answer: dict[str, Feature] = {}
    for index, feature in enumerate(features, start=1):
        by_answer[feature.value] = feature
        by_answer[str(index)] = feature
        console.print(f"  {index}. {feature.label}  [dim]({feature.value})[/dim]")

    while True:
        answer = _ask(prompter, "Choose your reality", choices=list(by_answer))
        if not answer:
            return None
        if answer.lower() in by_answer:
            return by_answer[answer.lower()]
        print_warning(f"Unknown choice: {answer!r}")


def collect_request(
    prompter: Prompter, config: GeneratorConfig
) -> GenerationRequest | None:
    """Ask the three questions and build a :class:`GenerationRequest`.

    Invalid project names and unknown feature choices are reported and asked
    again.

    Returns:
        The request, or ``None`` when an answer is missing after the
        questions complete.

    Raises:
        PromptCancelled: If the user interrupts any question.
    """
    project_name = _ask_project_name(prompter, config)
    # Embedded verbatim in the env file, so only checked for emptiness.
    personalization_name = _ask(
        prompter, "Your name", strip=False, default=config.default_user_name
    )
    feature = _ask_feature(prompter)

    if not project_name or not personalization_name.strip() or feature is None:
        return None

    return GenerationRequest(
        project_name=project_name,
        personalization_name=personalization_name,
        feature=feature,
    )
