from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

from stutter.config import get_stdlib_path
from stutter.errors import StutterBootstrapError, StutterError
from stutter.types.environment import GlobalEnvironment

logger = logging.getLogger(__name__)


def split_forms(text: str) -> Iterator[str]:
    """Split source into top-level forms by paren balance.

    `;` comments are dropped and never count towards the balance. A form is
    emitted when its closing paren brings the balance back to zero; text
    left over at the end (an unclosed form, a bare atom) is emitted as a
    last form so that running it reports the problem.
    """
    depth = 0
    in_comment = False
    form: list[str] = []
    for ch in text:
        if in_comment:
            if ch == "\n":
                in_comment = False
                form.append(ch)
            continue
        if ch == ";":
            in_comment = True
            continue
        form.append(ch)
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth <= 0:
                yield "".join(form).strip()
                form.clear()
                depth = 0
    rest = "".join(form).strip()
    if rest:
        yield rest


def paren_balance(text: str) -> int:
    """Open minus close parens, ignoring `;` comments."""
    balance = 0
    for line in text.splitlines():
        code = line.split(";", 1)[0]
        balance += code.count("(") - code.count(")")
    return balance


def pad(form: str) -> str:
    # The lexer rejects a source that ends inside a raw token.
    return f" {form} "


def load_source(code: str, global_env: GlobalEnvironment, origin: str = "<string>") -> int:
    """Run every top-level form of `code` against `global_env`.

    Returns the number of forms run. A failing form raises
    StutterBootstrapError naming `origin` and the form's position.
    """
    from stutter.interpreter import run

    count = 0
    for count, form in enumerate(split_forms(code), start=1):
        try:
            run(pad(form), global_env)
        except StutterError as exc:
            raise StutterBootstrapError(f"{origin}: form {count}: {exc}") from exc
    logger.info("loaded %d forms from %s", count, origin)
    return count


def load_stdlib(global_env: GlobalEnvironment, path: Optional[Path] = None) -> int:
    """Load the standard library file into `global_env`.

    Raises FileNotFoundError when the file is missing; drivers treat that as
    fatal at startup.
    """
    p = Path(path) if path is not None else get_stdlib_path()
    code = p.read_text(encoding="utf-8")
    return load_source(code, global_env, str(p))
