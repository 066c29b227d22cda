"""Read-eval-print loop around a ``Session``.

The loop only does I/O: it prints the listing and status, reads one line,
prints the command output and repeats until the session asks to stop or input
ends. End of input and Ctrl+C close the session the same way ``exit`` does.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Callable

from .render import paint, render_divider
from .session import Session

PROMPT = "Enter a command: "


def _default_write(text: str) -> None:
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def _divider_width() -> int:
    return max(1, min(80, shutil.get_terminal_size((80, 24)).columns))


def run_shell(
    session: Session,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = _default_write,
) -> None:
    """Drive ``session`` until ``exit``, end of input, or interrupt."""
    theme = session.theme
    prompt = paint(PROMPT, theme.prompt, theme)
    try:
        while True:
            for line in session.screen_lines():
                write(line)
            write("")
            try:
                raw = read_line(prompt)
            except EOFError:
                write("")
                break
            result = session.execute(raw)
            for line in result.lines:
                write(line)
            if not result.keep_running:
                return
            write(render_divider(_divider_width(), theme))
    except KeyboardInterrupt:
        write("")
    for line in session.close():
        write(line)


__all__ = ["PROMPT", "run_shell"]
