from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Sequence

from datarepo.ingest.errors import PromptError
from datarepo.ingest.options import SelectOption

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"

_YES = {"y", "yes"}
_NO = {"n", "no"}


class PromptEngine(Protocol):
    def select(self, title: str, help: str, options: Sequence[SelectOption]) -> SelectOption:
        ...

    def confirm(self, question: str) -> bool:
        ...

    def text(self, label: str, *, required: bool = True) -> str:
        ...

    def editor(self, initial_text: str, syntax: str) -> str:
        ...


def resolve_editor(configured: Optional[str] = None) -> str:
    for candidate in (configured, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate and candidate.strip():
            return candidate.strip()
    return DEFAULT_EDITOR


class TerminalPrompts:
    """Prompt engine reading answers from stdin.

    Menus and hints go to stderr so stdout mostly carries the review
    artifacts. EOF and Ctrl-C surface as ``PromptError``.
    """

    def __init__(self, *, editor: Optional[str] = None, stream=None):
        self._editor = editor
        self._stream = stream

    @property
    def stream(self):
        return self._stream or sys.stderr

    def _say(self, message: str = "") -> None:
        print(message, file=self.stream)

    def _read(self, prompt: str) -> str:
        try:
            return input(prompt)
        except (EOFError, KeyboardInterrupt) as exc:
            self._say()
            raise PromptError("prompt aborted: no input received") from exc

    def select(self, title: str, help: str, options: Sequence[SelectOption]) -> SelectOption:
        if not options:
            raise PromptError(f"{title}: nothing to choose from")
        self._say(f"{title}:")
        if help:
            self._say(f"  {help}")
        for i, opt in enumerate(options, 1):
            self._say(f"  [{i}] {opt.name}")
            if opt.description:
                self._say(f"      {opt.description}")
        while True:
            sel = self._read("> ").strip()
            if sel.isdigit():
                idx = int(sel)
                if 1 <= idx <= len(options):
                    return options[idx - 1]
            self._say("Please enter a number from the list.")

    def confirm(self, question: str) -> bool:
        while True:
            answer = self._read(f"{question} [y/N]: ").strip().lower()
            if answer == "" or answer in _NO:
                return False
            if answer in _YES:
                return True
            self._say("Please answer y or n.")

    def text(self, label: str, *, required: bool = True) -> str:
        while True:
            value = self._read(f"{label}: ").strip()
            if value or not required:
                return value
            self._say(f"{label} is required.")

    def editor(self, initial_text: str, syntax: str) -> str:
        command = shlex.split(resolve_editor(self._editor))
        suffix = f".{syntax}" if syntax else ".txt"
        fd, name = tempfile.mkstemp(prefix="datarepo-", suffix=suffix)
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(initial_text)
            logger.debug("Opening %s with editor %s", path, command[0])
            try:
                result = subprocess.run([*command, str(path)], check=False)
            except OSError as exc:
                raise PromptError(f"failed to launch editor {command[0]!r}: {exc}") from exc
            except KeyboardInterrupt as exc:
                raise PromptError("editor session interrupted") from exc
            if result.returncode != 0:
                raise PromptError(
                    f"editor {command[0]!r} exited with status {result.returncode}")
            return path.read_text(encoding="utf-8")
        finally:
            path.unlink(missing_ok=True)
