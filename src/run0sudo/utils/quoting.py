"""Pack a command's arguments into one string for ``sh -c``.

Every character outside a small allow-list is backslash-escaped, so the
shell reads each argument back as a single literal word. ``$`` is on the
allow-list and is therefore still subject to parameter expansion.
"""
from __future__ import annotations

import string
from collections.abc import Iterable

SAFE_CHARS = frozenset(string.ascii_letters + string.digits + '_-$')


def shell_escape_arg(arg: str) -> str:
    """Escape a single argument.

    Arguments made only of allow-listed characters come back unchanged.
    """
    if not arg:
        return "''"
    out = []
    for c in arg:
        if c == '\n':
            # backslash-newline would be eaten as a line continuation
            out.append("'\n'")
        elif c in SAFE_CHARS:
            out.append(c)
        else:
            out.append('\\' + c)
    return ''.join(out)


def shell_escape(args: Iterable[str]) -> str:
    return ' '.join(shell_escape_arg(a) for a in args)
