"""
prompt.py

Responsibility: Ask the user for a line of input with a default.
"""

from __future__ import annotations

from collections.abc import Callable

from create_package.log import highlight

InputFn = Callable[[str], str]


class PromptError(RuntimeError):
    pass


class Aborted(RuntimeError):
    """The user declined to continue."""


def ask(label: str, default: str | None = None, *, input_fn: InputFn | None = None) -> str:
    """
    Prompt with `label` and return the answer, or `default` for an empty answer.

    Raises PromptError when input cannot be read (EOF, ^C).
    """
    suffix = f" ({default})" if default else ""
    try:
        answer = (input_fn or input)(highlight(f"{label}{suffix} "))
    except (EOFError, KeyboardInterrupt, OSError) as e:
        raise PromptError(f"Could not read an answer for {label!r}") from e
    answer = answer.strip()
    if answer:
        return answer
    return default or ""


def confirm(label: str, *, input_fn: InputFn | None = None) -> bool:
    """Yes/no question defaulting to yes. Anything starting with `y` counts as yes."""
    answer = ask(label, "yes", input_fn=input_fn)
    return answer.lower().startswith("y")
