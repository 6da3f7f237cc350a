import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests run from the repository root
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the caller's sudo/run0 settings and config file out of every test."""
    for name in ('SUDO_ASKPASS', 'SUDO_PROMPT', 'RUN0SUDO_RUN0_PATH', 'RUN0SUDO_LOG_LEVEL', 'RUN0SUDO_LOG_FILE'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg'))
    return monkeypatch


class FakeAccount:
    def __init__(self, name, uid, shell):
        self.pw_name = name
        self.pw_uid = uid
        self.pw_shell = shell


class FakeAccounts:
    """In-memory stand-in for the password database."""

    def __init__(self, *accounts):
        self.accounts = list(accounts)

    def by_name(self, name):
        return next((a for a in self.accounts if a.pw_name == name), None)

    def by_uid(self, uid):
        return next((a for a in self.accounts if a.pw_uid == uid), None)


@pytest.fixture
def accounts():
    return FakeAccounts(
        FakeAccount('root', 0, '/bin/bash'),
        FakeAccount('alice', 1000, '/bin/zsh'),
        FakeAccount('nologin', 1001, ''),
    )
