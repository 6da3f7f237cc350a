import logging
import os
from typing import Callable, Mapping, Optional

from .request import ParsedRequest, RejectedRequest, ShellMode, ValidatedRequest

logger = logging.getLogger(__name__)

DEFAULT_CLOSE_FROM = 3

Rule = Callable[[ParsedRequest, Mapping[str, str]], Optional[str]]


def _askpass(req: ParsedRequest, env: Mapping[str, str]) -> Optional[str]:
    if req.askpass and 'SUDO_ASKPASS' in env:
        return "custom askpass programs are unsupported"
    return None


def _close_from(req: ParsedRequest, env: Mapping[str, str]) -> Optional[str]:
    if req.close_from != DEFAULT_CLOSE_FROM:
        return f"close-from must be exactly {DEFAULT_CLOSE_FROM} or unspecified, was {req.close_from}"
    return None


def _prompt(req: ParsedRequest, env: Mapping[str, str]) -> Optional[str]:
    if req.prompt is not None or 'SUDO_PROMPT' in env:
        return "password prompt cannot be overridden"
    return None


def _flag(attr: str, message: str) -> Rule:
    def rule(req: ParsedRequest, env: Mapping[str, str]) -> Optional[str]:
        value = getattr(req, attr)
        if value is not None and value is not False:
            return message
        return None

    rule.__name__ = f'_{attr}'
    return rule


# Evaluated top to bottom; the first failing rule is the only one reported.
UNSUPPORTED_RULES: list[Rule] = [
    _askpass,
    _close_from,
    _flag('edit', "editing is not supported"),
    _flag('list_privileges', "listing privileges is unsupported"),
    _flag('other_user', "listing privileges of other users is unsupported"),
    _flag('no_update', "cached credentials are always updated"),
    _flag('preserve_groups', "cannot preserve groups"),
    _flag('stdin', "cannot use stdin/stderr for the password prompt"),
    _prompt,
    _flag('validate', "cannot validate credentials"),
    _flag('preserve_all_env', "preserving the entire environment is unsupported"),
]

UNIMPLEMENTED_RULES: list[Rule] = [
    _flag('background', "background execution is unimplemented"),
    _flag('remove_timestamp', "altering sudo timestamps is unimplemented"),
    _flag('reset_timestamp', "altering sudo timestamps is unimplemented"),
    _flag('chroot', "chroot is unimplemented"),
    _flag('command_timeout', "command timeouts are unimplemented"),
]

# Legacy flags with no run0 counterpart that are harmless to drop.
IGNORED_FLAGS = ('bell', 'set_home')


class FlagValidator:
    """Decide whether a parsed sudo command line can be expressed with run0.

    Rules are checked in a fixed order and validation stops at the first
    violation, so every rejection names exactly one offending feature.
    """

    def __init__(self, env: Mapping[str, str] | None = None):
        self.env = env if env is not None else os.environ
        self.rules: list[Rule] = UNSUPPORTED_RULES + UNIMPLEMENTED_RULES

    def check(self, request: ParsedRequest) -> Optional[str]:
        """Return the message of the first violated rule, or None."""
        for rule in self.rules:
            message = rule(request, self.env)
            if message is not None:
                logger.debug(f"Rule {rule.__name__} rejected the request")
                return message
        if request.shell_mode is ShellMode.NO_SHELL and not request.command:
            return "must specify --login, --shell, or a COMMAND"
        return None

    def validate(self, request: ParsedRequest) -> ValidatedRequest:
        """Return the translatable part of `request` or raise RejectedRequest."""
        message = self.check(request)
        if message is not None:
            raise RejectedRequest(message)

        for attr in IGNORED_FLAGS:
            if getattr(request, attr):
                logger.debug(f"Ignoring --{attr.replace('_', '-')}: no run0 equivalent")

        return ValidatedRequest(
            chdir=request.chdir,
            preserve_env=tuple(request.preserve_env),
            group=request.group,
            user=request.user,
            host=request.host,
            non_interactive=request.non_interactive,
            shell_mode=request.shell_mode,
            command=tuple(request.command),
        )
