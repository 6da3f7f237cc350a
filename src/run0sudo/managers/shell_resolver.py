"""Work out which shell binary run0 should start for --login / --shell.

Login shells come from the target user's password database entry (root when
no user is given). Interactive shells prefer the caller's SHELL variable and
fall back to the caller's own password database entry.
"""
from __future__ import annotations

import logging
import os
import pwd
from typing import Any, Mapping, Optional

from .request import ResolvedShell, ShellMode, ShellResolutionError

logger = logging.getLogger(__name__)

SUPERUSER_UID = 0


class PasswdAccounts:
    """Read-only view of the system account database."""

    def by_name(self, name: str) -> Optional[Any]:
        try:
            return pwd.getpwnam(name)
        except KeyError:
            return None

    def by_uid(self, uid: int) -> Optional[Any]:
        try:
            return pwd.getpwuid(uid)
        except KeyError:
            return None


class ShellResolver:
    def __init__(self, env: Mapping[str, str] | None = None, accounts: PasswdAccounts | None = None):
        self.env = env if env is not None else os.environ
        self.accounts = accounts or PasswdAccounts()

    def resolve(self, mode: ShellMode, user: str | None = None) -> ResolvedShell:
        """Return the shell for `mode`.

        Raises:
            ShellResolutionError: the account is unknown or has no shell set.
            ValueError: `mode` is ShellMode.NO_SHELL.
        """
        if mode is ShellMode.LOGIN:
            path = self._login_shell(user)
        elif mode is ShellMode.INTERACTIVE:
            path = self._interactive_shell()
        else:
            raise ValueError(f"no shell to resolve for mode {mode.name}")

        if not path:
            raise ShellResolutionError("failed to determine target shell")

        logger.debug(f"Resolved {mode.value} shell: {path}")
        return ResolvedShell(path=path, login=mode is ShellMode.LOGIN)

    def _login_shell(self, user: str | None) -> Optional[str]:
        if user is not None:
            entry = self.accounts.by_name(user)
        else:
            entry = self.accounts.by_uid(SUPERUSER_UID)
        return _shell_of(entry)

    def _interactive_shell(self) -> Optional[str]:
        shell = self.env.get('SHELL')
        if shell:
            return shell
        return _shell_of(self.accounts.by_uid(os.getuid()))


def _shell_of(entry: Any) -> Optional[str]:
    if entry is None:
        return None
    return getattr(entry, 'pw_shell', None) or None
