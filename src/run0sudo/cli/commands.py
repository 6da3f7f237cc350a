from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

import click

from run0sudo.config import get_log_file, get_log_level, get_run0_path
from run0sudo.managers.invocation_builder import translate
from run0sudo.managers.request import LaunchFailure, ParsedRequest, RejectedRequest, ShellMode
from run0sudo.utils import privilege
from run0sudo.utils.logging_config import get_logger, setup_cli_logging

logger = get_logger(__name__)


def split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate sudo's own flags from the command to run.

    Flags are the leading tokens that start with '-'. A literal '--' ends
    them and is dropped; everything after the flags is the command, untouched.
    Option values therefore have to be attached ('-uroot', '--user=root').
    """
    rest = list(argv)
    flags: list[str] = []
    while rest and rest[0].startswith('-'):
        tok = rest.pop(0)
        if tok == '--':
            break
        flags.append(tok)
    return flags, rest


def _ensure_utf8(tokens: Sequence[str]) -> tuple[str, ...]:
    # sys.argv carries undecodable bytes as lone surrogates
    try:
        for tok in tokens:
            tok.encode('utf-8')
    except UnicodeEncodeError:
        raise RejectedRequest("failed to parse arguments as utf8")
    return tuple(tokens)


def _split_names(ctx, param, value) -> tuple[str, ...]:
    return tuple(name for item in value for name in item.split(',') if name)


def _shell_mode(login: bool, shell: bool) -> ShellMode:
    if login and shell:
        raise click.UsageError("--login and --shell cannot be used together")
    if login:
        return ShellMode.LOGIN
    if shell:
        return ShellMode.INTERACTIVE
    return ShellMode.NO_SHELL


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(None, '-V', '--version', package_name='run0-sudo')
@click.option('-A', '--askpass', is_flag=True, help='Use a helper program for password prompting (unsupported with SUDO_ASKPASS)')
@click.option('-B', '--bell', is_flag=True, help='Ring the bell when prompting (ignored)')
@click.option('-b', '--background', is_flag=True, help='Run the command in the background (unimplemented)')
@click.option('-C', '--close-from', type=click.IntRange(min=0), default=3, metavar='FD', help='Close file descriptors >= FD (only 3 is accepted)')
@click.option('-E', 'preserve_all_env', is_flag=True, help='Preserve the entire environment (unsupported)')
@click.option('--preserve-env', multiple=True, metavar='VAR', callback=_split_names, help='Preserve a comma separated list of environment variables')
@click.option('-e', '--edit', is_flag=True, help='Edit files instead of running a command (unsupported)')
@click.option('-g', '--group', default=None, help='Run the command as this group')
@click.option('-H', '--set-home', is_flag=True, help='Set HOME to the target user\'s home (ignored)')
@click.option('--host', default=None, help='Run the command on this host (container or machine)')
@click.option('-K', '--remove-timestamp', is_flag=True, help='Remove the cached credentials (unimplemented)')
@click.option('-k', '--reset-timestamp', is_flag=True, help='Invalidate the cached credentials (unimplemented)')
@click.option('-l', '--list', 'list_privileges', is_flag=True, help='List privileges (unsupported)')
@click.option('-N', '--no-update', is_flag=True, help='Do not update cached credentials (unsupported)')
@click.option('-n', '--non-interactive', is_flag=True, help='Never prompt for a password')
@click.option('-P', '--preserve-groups', is_flag=True, help='Preserve the group vector (unsupported)')
@click.option('-p', '--prompt', default=None, help='Custom password prompt (unsupported)')
@click.option('-R', '--chroot', default=None, metavar='DIR', help='Change the root directory (unimplemented)')
@click.option('-S', '--stdin', is_flag=True, help='Read the password from stdin (unsupported)')
@click.option('-U', '--other-user', default=None, metavar='USER', help='List privileges of another user (unsupported)')
@click.option('-T', '--command-timeout', default=None, metavar='TIMEOUT', help='Terminate the command after a timeout (unimplemented)')
@click.option('-u', '--user', default=None, help='Run the command as this user')
@click.option('-D', '--chdir', default=None, metavar='DIR', help='Run the command in this directory')
@click.option('-v', '--validate', is_flag=True, help='Update cached credentials without running a command (unsupported)')
@click.option('-i', '--login', is_flag=True, help="Run the target user's login shell")
@click.option('-s', '--shell', is_flag=True, help="Run the shell from SHELL or the invoking user's account")
@click.pass_context
def cli(ctx, login: bool, shell: bool, **flags):
    """Run a command as another user through run0, using sudo's flags.

    Options must come before the command and take their values attached,
    e.g. `-uroot` or `--user=root`.
    """
    log_file = get_log_file()
    try:
        setup_cli_logging(get_log_level(), log_file=log_file)
    except OSError as e:
        click.echo(f"cannot open log file {log_file}: {e.strerror or e}", err=True)
        ctx.exit(1)

    mode = _shell_mode(login, shell)
    obj = ctx.obj or {}

    try:
        command = _ensure_utf8(obj.get('command', ()))
        request = ParsedRequest(shell_mode=mode, command=command, **flags)
        argv = translate(request, program=get_run0_path())
        logger.debug(f"Executing: {privilege.render_command(argv)}")
        privilege.exec_command(argv)
    except (RejectedRequest, LaunchFailure) as e:
        click.echo(str(e), err=True)
        ctx.exit(1)


def main(argv: Optional[Sequence[str]] = None):
    if argv is None:
        argv = sys.argv[1:]
    flags, command = split_argv(argv)
    prog_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else 'sudo'
    cli.main(args=flags, prog_name=prog_name, obj={'command': command})
