from __future__ import annotations

from typing import Any, Sequence

from datarepo.ingest.errors import PromptError
from datarepo.ingest.options import SelectOption


class ScriptedPrompts:
    """Prompt engine double that answers from a script and records every call.

    Select answers are option values; a value missing from the offered options
    fails the test instead of being returned. A ``PromptError`` instance in the
    script is raised in place of an answer.
    """

    def __init__(self, answers: Sequence[Any]):
        self._answers = list(answers)
        self.calls: list[tuple[str, Any]] = []
        self.offered: dict[str, tuple[SelectOption, ...]] = {}

    def _next(self, kind: str, label: str):
        self.calls.append((kind, label))
        if not self._answers:
            raise AssertionError(f"no scripted answer left for {kind} prompt {label!r}")
        answer = self._answers.pop(0)
        if isinstance(answer, PromptError):
            raise answer
        return answer

    def select(self, title: str, help: str, options: Sequence[SelectOption]) -> SelectOption:
        self.offered[title] = tuple(options)
        value = self._next("select", title)
        for option in options:
            if option.value == value:
                return option
        raise AssertionError(f"{value!r} is not offered in {title!r}: {[o.value for o in options]}")

    def confirm(self, question: str) -> bool:
        answer = self._next("confirm", question)
        assert isinstance(answer, bool)
        return answer

    def text(self, label: str, *, required: bool = True) -> str:
        return self._next("text", label)

    def editor(self, initial_text: str, syntax: str) -> str:
        self.calls.append(("editor-buffer", initial_text))
        answer = self._next("editor", syntax)
        if callable(answer):
            return answer(initial_text)
        return answer

    @property
    def remaining(self) -> list[Any]:
        return list(self._answers)

    def labels(self, kind: str) -> list[str]:
        return [label for k, label in self.calls if k == kind]


def s3_csv_answers(*, delimiter: str = "comma", header: bool = True) -> list[Any]:
    return ["aws_s3", "my-bucket", "data/", "csv_files", delimiter, header]


def local_csv_answers(path: str, *, delimiter: str = "comma", header: bool = True) -> list[Any]:
    return ["local_directory", path, "csv_files", delimiter, header]
