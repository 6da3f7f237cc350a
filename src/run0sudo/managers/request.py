"""Request model shared by the validator, resolver and invocation builder."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RejectedRequest(ValueError):
    """The command line asks for something that cannot be translated."""


class LaunchFailure(RuntimeError):
    """Resolving the execution context or replacing the process failed."""


class ShellResolutionError(LaunchFailure):
    """No usable shell could be found for the requested shell mode."""


class ShellMode(Enum):
    NO_SHELL = 'no-shell'
    LOGIN = 'login'
    INTERACTIVE = 'interactive'


@dataclass(frozen=True)
class ParsedRequest:
    """Everything the legacy command line said, before any policy is applied."""

    askpass: bool = False
    bell: bool = False
    background: bool = False
    close_from: int = 3
    preserve_all_env: bool = False
    preserve_env: tuple[str, ...] = ()
    edit: bool = False
    group: Optional[str] = None
    set_home: bool = False
    host: Optional[str] = None
    remove_timestamp: bool = False
    reset_timestamp: bool = False
    list_privileges: bool = False
    no_update: bool = False
    non_interactive: bool = False
    preserve_groups: bool = False
    prompt: Optional[str] = None
    chroot: Optional[str] = None
    stdin: bool = False
    other_user: Optional[str] = None
    command_timeout: Optional[str] = None
    user: Optional[str] = None
    chdir: Optional[str] = None
    validate: bool = False
    shell_mode: ShellMode = ShellMode.NO_SHELL
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidatedRequest:
    """The subset of a ParsedRequest that has a run0 translation."""

    chdir: Optional[str] = None
    preserve_env: tuple[str, ...] = ()
    group: Optional[str] = None
    user: Optional[str] = None
    host: Optional[str] = None
    non_interactive: bool = False
    shell_mode: ShellMode = ShellMode.NO_SHELL
    command: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedShell:
    path: str
    login: bool
