from jobboard.core.security import verify_password
from jobboard.models.types import UserRole
from jobboard.repos import user_repo


def test_create_hashes_password_and_finds_user(db_session):
    user = user_repo.create(db_session, "asha@example.com", "secret1", UserRole.JOB_SEEKER)
    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)
    assert user.is_active is True
    assert user.is_admin is False
    assert user_repo.get_by_email(db_session, "asha@example.com").id == user.id
    assert user_repo.get_by_id(db_session, user.id).email == "asha@example.com"
    assert user_repo.get_by_id(db_session, "missing") is None


def test_update_flags(db_session, make_user):
    user = make_user("asha@example.com")
    updated = user_repo.update(db_session, user.id, is_admin=True)
    assert updated.is_admin is True
    assert updated.is_active is True

    updated = user_repo.update(db_session, user.id, is_active=False)
    assert updated.is_admin is True
    assert updated.is_active is False
    assert user_repo.update(db_session, "missing", is_admin=True) is None
