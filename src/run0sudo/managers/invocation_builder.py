from typing import Mapping, Optional

from ..utils.quoting import shell_escape
from .flag_validator import FlagValidator
from .request import ParsedRequest, ResolvedShell, ShellMode, ValidatedRequest
from .shell_resolver import ShellResolver

DEFAULT_PROGRAM = 'run0'


def build_invocation(
    request: ValidatedRequest,
    shell: Optional[ResolvedShell] = None,
    program: str = DEFAULT_PROGRAM,
) -> list[str]:
    """Translate a validated request into the run0 argument vector.

    The result starts with `program` and is deterministic for a given input.
    `shell` is required when the request asks for a login or interactive
    shell and ignored otherwise.
    """
    argv = [program, '--background=']

    if request.chdir is not None:
        argv += ['-D', request.chdir]

    for name in request.preserve_env:
        argv.append(f'--setenv={name}')

    # Identifiers are passed through as-is; run0 does its own uid/name lookup.
    if request.group is not None:
        argv += ['-g', request.group]

    if request.user is not None:
        argv += ['-u', request.user]

    if request.host is not None:
        argv.append(f'--machine={request.host}')

    if request.non_interactive:
        argv.append('--no-ask-password')

    argv.append('--')

    if request.shell_mode is ShellMode.NO_SHELL:
        argv += list(request.command)
        return argv

    if shell is None:
        raise ValueError(f"{request.shell_mode.name} mode needs a resolved shell")

    argv.append(shell.path)
    if shell.login:
        argv.append('--login')
    if request.command:
        argv += ['-c', shell_escape(request.command)]
    return argv


def translate(
    request: ParsedRequest,
    env: Mapping[str, str] | None = None,
    resolver: ShellResolver | None = None,
    program: str = DEFAULT_PROGRAM,
) -> list[str]:
    """Validate, resolve the shell if needed, and build the run0 command.

    Raises RejectedRequest or ShellResolutionError; nothing is built on error.
    """
    validated = FlagValidator(env=env).validate(request)

    shell = None
    if validated.shell_mode is not ShellMode.NO_SHELL:
        resolver = resolver or ShellResolver(env=env)
        shell = resolver.resolve(validated.shell_mode, user=validated.user)

    return build_invocation(validated, shell=shell, program=program)
