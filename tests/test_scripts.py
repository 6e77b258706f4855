import pytest

import jobboard.scripts.ensure_tables as ensure_tables
import jobboard.scripts.promote_admin as promote
from jobboard.models.types import UserRole
from jobboard.models.user import User
from tests.factories import StubUser


class _DB:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def db(monkeypatch):
    inst = _DB()
    monkeypatch.setattr(promote, "ensure_tables_exist", lambda: None)
    monkeypatch.setattr(promote, "SessionLocal", lambda: inst)
    return inst


def test_promote_admin_requires_email(monkeypatch, db):
    monkeypatch.setattr(promote.sys, "argv", ["prog"])
    with pytest.raises(SystemExit):
        promote.main()


def test_promote_admin_user_not_found(monkeypatch, db):
    monkeypatch.setattr(promote, "get_by_email", lambda db, email: None)
    monkeypatch.setattr(promote.sys, "argv", ["prog", "missing@example.com"])
    with pytest.raises(SystemExit):
        promote.main()
    assert db.closed is True


def test_promote_admin_success(monkeypatch, db, capsys):
    user = StubUser(id="u1", email="hr@acme.example", role=UserRole.EMPLOYER)
    updates = {}
    monkeypatch.setattr(promote, "get_by_email", lambda db, email: user if email == "hr@acme.example" else None)
    monkeypatch.setattr(promote, "update", lambda db, uid, **kwargs: updates.update(kwargs) or user)
    monkeypatch.setattr(promote.sys, "argv", ["prog", "  hr@acme.example "])
    promote.main()
    assert updates == {"is_admin": True}
    assert "Granted admin access to hr@acme.example (employer)." in capsys.readouterr().out


def test_promote_admin_already_admin(monkeypatch, db, capsys):
    user = StubUser(id="u1", email="admin@example.com", is_admin=True)
    monkeypatch.setattr(promote, "get_by_email", lambda db, email: user)
    monkeypatch.setattr(promote, "update", lambda db, uid, **kwargs: pytest.fail("should not update"))
    monkeypatch.setattr(promote.sys, "argv", ["prog", "admin@example.com"])
    promote.main()
    assert "already an admin" in capsys.readouterr().out


def test_ensure_tables_main(monkeypatch, capsys):
    called = {"ok": False}
    monkeypatch.setattr(ensure_tables, "setup_logging", lambda: None)
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: called.update(ok=True))
    ensure_tables.main()
    assert called["ok"] is True
    assert "table check complete" in capsys.readouterr().out


def test_promote_admin_keeps_mixed_case_address(monkeypatch, db_session, make_user, capsys):
    user = make_user("Asha.Rao@example.com")
    monkeypatch.setattr(promote, "ensure_tables_exist", lambda: None)
    monkeypatch.setattr(promote, "SessionLocal", lambda: db_session)
    monkeypatch.setattr(promote.sys, "argv", ["prog", "Asha.Rao@example.com"])
    promote.main()
    assert "Granted admin access to Asha.Rao@example.com (job_seeker)." in capsys.readouterr().out
    assert db_session.get(User, user.id).is_admin is True
