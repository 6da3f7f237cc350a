import pytest

from run0sudo.managers.flag_validator import FlagValidator
from run0sudo.managers.request import ParsedRequest, RejectedRequest, ShellMode, ValidatedRequest

CMD = ('true',)

REJECTED = [
    (dict(close_from=10), {}, "close-from must be exactly 3 or unspecified, was 10"),
    (dict(edit=True), {}, "editing is not supported"),
    (dict(list_privileges=True), {}, "listing privileges is unsupported"),
    (dict(other_user='bob'), {}, "listing privileges of other users is unsupported"),
    (dict(no_update=True), {}, "cached credentials are always updated"),
    (dict(preserve_groups=True), {}, "cannot preserve groups"),
    (dict(stdin=True), {}, "cannot use stdin/stderr for the password prompt"),
    (dict(prompt='pw: '), {}, "password prompt cannot be overridden"),
    (dict(), {'SUDO_PROMPT': 'pw: '}, "password prompt cannot be overridden"),
    (dict(validate=True), {}, "cannot validate credentials"),
    (dict(preserve_all_env=True), {}, "preserving the entire environment is unsupported"),
    (dict(askpass=True), {'SUDO_ASKPASS': '/usr/bin/ssh-askpass'}, "custom askpass programs are unsupported"),
    (dict(background=True), {}, "background execution is unimplemented"),
    (dict(remove_timestamp=True), {}, "altering sudo timestamps is unimplemented"),
    (dict(reset_timestamp=True), {}, "altering sudo timestamps is unimplemented"),
    (dict(chroot='/srv/root'), {}, "chroot is unimplemented"),
    (dict(command_timeout='30'), {}, "command timeouts are unimplemented"),
]


@pytest.mark.parametrize('flags,env,message', REJECTED)
def test_each_rejected_flag_has_its_own_message(flags, env, message):
    validator = FlagValidator(env=env)
    with pytest.raises(RejectedRequest) as exc:
        validator.validate(ParsedRequest(command=CMD, **flags))
    assert str(exc.value) == message


def test_askpass_without_env_override_is_accepted():
    validated = FlagValidator(env={}).validate(ParsedRequest(askpass=True, command=CMD))
    assert validated.command == CMD


def test_first_failing_rule_wins():
    req = ParsedRequest(edit=True, background=True, close_from=5, command=CMD)
    assert FlagValidator(env={}).check(req) == "close-from must be exactly 3 or unspecified, was 5"

    req = ParsedRequest(validate=True, chroot='/x', command=CMD)
    assert FlagValidator(env={}).check(req) == "cannot validate credentials"


def test_missing_command_without_shell_mode():
    with pytest.raises(RejectedRequest, match='must specify --login, --shell, or a COMMAND'):
        FlagValidator(env={}).validate(ParsedRequest())


def test_flag_rules_checked_before_missing_command():
    assert FlagValidator(env={}).check(ParsedRequest(edit=True)) == "editing is not supported"


@pytest.mark.parametrize('mode', [ShellMode.LOGIN, ShellMode.INTERACTIVE])
def test_shell_modes_need_no_command(mode):
    validated = FlagValidator(env={}).validate(ParsedRequest(shell_mode=mode))
    assert validated.shell_mode is mode
    assert validated.command == ()


def test_validated_request_carries_translatable_fields():
    req = ParsedRequest(
        chdir='/srv',
        preserve_env=('PATH', 'HOME'),
        group='wheel',
        user='alice',
        host='box',
        non_interactive=True,
        bell=True,
        set_home=True,
        command=('ls', '-l'),
    )
    assert FlagValidator(env={}).validate(req) == ValidatedRequest(
        chdir='/srv',
        preserve_env=('PATH', 'HOME'),
        group='wheel',
        user='alice',
        host='box',
        non_interactive=True,
        shell_mode=ShellMode.NO_SHELL,
        command=('ls', '-l'),
    )


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv('SUDO_PROMPT', '[sudo] ')
    assert FlagValidator().check(ParsedRequest(command=CMD)) == "password prompt cannot be overridden"
