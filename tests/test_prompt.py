import pytest

from create_package.prompt import PromptError, ask, confirm


def _answers(*answers: str):
    it = iter(answers)
    prompts: list[str] = []

    def input_fn(prompt: str) -> str:
        prompts.append(prompt)
        return next(it)

    return input_fn, prompts


def test_ask_returns_answer() -> None:
    input_fn, prompts = _answers("  my-tool  ")
    assert ask("package name:", "tool", input_fn=input_fn) == "my-tool"
    assert "package name: (tool)" in prompts[0]


def test_ask_empty_answer_uses_default() -> None:
    input_fn, _ = _answers("")
    assert ask("description:", "🆕", input_fn=input_fn) == "🆕"


def test_ask_eof_is_prompt_error() -> None:
    def input_fn(_prompt: str) -> str:
        raise EOFError

    with pytest.raises(PromptError):
        ask("package name:", "tool", input_fn=input_fn)


def test_ask_interrupt_is_prompt_error() -> None:
    def input_fn(_prompt: str) -> str:
        raise KeyboardInterrupt

    with pytest.raises(PromptError):
        ask("package name:", input_fn=input_fn)


@pytest.mark.parametrize("answer,expected", [("", True), ("y", True), ("Yes", True), ("no", False), ("nope", False)])
def test_confirm(answer: str, expected: bool) -> None:
    input_fn, _ = _answers(answer)
    assert confirm("Is this OK?", input_fn=input_fn) is expected
