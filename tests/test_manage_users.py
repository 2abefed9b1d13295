"""Tests for the account management script."""

import asyncio
import importlib.util
from pathlib import Path

import pytest

from app.auth.security import verify_password
from app.storage.user_store import get_user_store

SCRIPT = Path(__file__).parent.parent / "scripts" / "manage_users.py"


@pytest.fixture(scope="module")
def manage_users():
    spec = importlib.util.spec_from_file_location("manage_users", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def fetch_account(username):
    return asyncio.run(get_user_store().get_by_username(username))


class TestAdd:
    def test_add_user(self, manage_users, capsys):
        code = manage_users.main(["add", "dana", "--name", "Dana Lee", "--role", "Viewer", "--password", "pw"])

        assert code == 0
        assert 'User "dana" added (Dana Lee, role: viewer)' in capsys.readouterr().out
        account = fetch_account("dana")
        assert account.role == "viewer"
        assert verify_password("pw", account.password_hash)

    def test_add_duplicate(self, manage_users, capsys):
        manage_users.main(["add", "dana", "--name", "Dana", "--password", "pw"])

        code = manage_users.main(["add", "dana", "--name", "Dana", "--password", "pw"])

        assert code == 1
        assert "already exists" in capsys.readouterr().out

    def test_add_overlong_password(self, manage_users, capsys):
        code = manage_users.main(["add", "dana", "--name", "Dana", "--password", "p" * 100])

        assert code == 1
        assert "cannot be longer than 72 bytes" in capsys.readouterr().out
        assert fetch_account("dana") is None

    def test_unknown_role_rejected_by_parser(self, manage_users):
        with pytest.raises(SystemExit):
            manage_users.main(["add", "dana", "--name", "Dana", "--role", "owner", "--password", "pw"])

    def test_prompted_password_mismatch(self, manage_users, monkeypatch, capsys):
        answers = iter(["first", "second"])
        monkeypatch.setattr(manage_users.getpass, "getpass", lambda prompt: next(answers))

        code = manage_users.main(["add", "dana", "--name", "Dana"])

        assert code == 1
        assert "Passwords do not match" in capsys.readouterr().out
        assert fetch_account("dana") is None


class TestList:
    def test_empty(self, manage_users, capsys):
        assert manage_users.main(["list"]) == 0
        assert "No users found." in capsys.readouterr().out

    def test_lists_accounts(self, manage_users, capsys):
        manage_users.main(["add", "alex", "--name", "Alex", "--role", "admin", "--password", "pw"])
        capsys.readouterr()

        manage_users.main(["list"])

        out = capsys.readouterr().out
        assert "alex" in out
        assert "admin" in out


class TestDeleteAndPasswd:
    def test_delete(self, manage_users, capsys):
        manage_users.main(["add", "sam", "--name", "Sam", "--password", "pw"])

        assert manage_users.main(["delete", "sam", "--yes"]) == 0
        assert fetch_account("sam") is None

    def test_delete_cancelled(self, manage_users, monkeypatch):
        manage_users.main(["add", "sam", "--name", "Sam", "--password", "pw"])
        monkeypatch.setattr("builtins.input", lambda prompt: "no")

        assert manage_users.main(["delete", "sam"]) == 1
        assert fetch_account("sam") is not None

    def test_delete_with_closed_stdin(self, manage_users, monkeypatch, capsys):
        manage_users.main(["add", "sam", "--name", "Sam", "--password", "pw"])

        def closed(prompt):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed)

        assert manage_users.main(["delete", "sam"]) == 1
        assert "Deletion cancelled." in capsys.readouterr().out
        assert fetch_account("sam") is not None

    def test_delete_unknown(self, manage_users, capsys):
        assert manage_users.main(["delete", "ghost", "--yes"]) == 1
        assert 'User "ghost" not found' in capsys.readouterr().out

    def test_passwd(self, manage_users):
        manage_users.main(["add", "sam", "--name", "Sam", "--password", "old"])

        assert manage_users.main(["passwd", "sam", "--password", "new"]) == 0
        assert verify_password("new", fetch_account("sam").password_hash)

    def test_passwd_overlong(self, manage_users, capsys):
        manage_users.main(["add", "sam", "--name", "Sam", "--password", "old"])

        assert manage_users.main(["passwd", "sam", "--password", "p" * 100]) == 1
        assert "cannot be longer than 72 bytes" in capsys.readouterr().out
        assert verify_password("old", fetch_account("sam").password_hash)

    def test_passwd_unknown(self, manage_users):
        assert manage_users.main(["passwd", "ghost", "--password", "pw"]) == 1
