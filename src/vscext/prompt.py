from __future__ import annotations

from typing import Callable

import typer

PromptFunc = Callable[[str], str]


def _read_answer(question: str) -> str:
    try:
        return str(typer.prompt(f"{question} (y/n)", default="", show_default=False))
    except typer.Abort:
        # end of input or Ctrl-C counts as "no"
        return ""


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() == "y"


async def confirm(question: str, prompt_func: PromptFunc = _read_answer) -> bool:
    """Ask a yes/no question on the calling thread.

    The read stays off worker threads so Ctrl-C can interrupt it.
    """
    return is_affirmative(prompt_func(question))
