from datetime import date

import pytest

import jobboard.repos.admin_repo as ar
from jobboard.core.errors import InvalidOperationError
from jobboard.core.security import generate_id
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.types import UserRole
from jobboard.repos import application_repo, job_repo, saved_job_repo
from jobboard.repos.analytics_repo import resolve_range
from tests.factories import application_form, job_form


@pytest.fixture
def populated(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER, company_name="Acme Corp")
    seeker = make_user("asha@example.com")
    db_session.add(
        JobSeekerProfile(id=generate_id(), user_id=seeker.id, full_name="Asha Rao", phone_number="+91 98765 43210")
    )
    db_session.commit()
    live = job_repo.save(db_session, employer.id, job_form(job_title="Live", status="active"))
    other = job_repo.save(db_session, employer.id, job_form(job_title="Also live", status="active"))
    job_repo.save(db_session, employer.id, job_form(job_title="Draft"))
    application_repo.submit(db_session, live.id, seeker.id, application_form())
    saved_job_repo.save(db_session, seeker.id, other.id)
    return employer, seeker


def test_get_stats_totals(db_session, populated):
    stats = ar.get_stats(db_session)
    assert stats == {
        "users_total": 2,
        "employers": 1,
        "job_seekers": 1,
        "admins": 0,
        "jobs_total": 3,
        "active_jobs": 2,
        "applications": 1,
        "saved_jobs": 1,
    }


def test_get_stats_adds_period_for_range(db_session, populated):
    stats = ar.get_stats(db_session, resolve_range(date(2000, 1, 1), date(2000, 1, 2)))
    assert stats["period"]["from"] == "2000-01-01"
    assert stats["period"]["applications"] == 0
    assert stats["period"]["new_users"] == 0


def test_search_employers_by_company_name(db_session, populated):
    results = ar.search_employers(db_session, "company_name", "acme")
    assert len(results) == 1
    user, profile, jobs = results[0]
    assert profile.company_name == "Acme Corp"
    assert sorted(j.job_title for j in jobs) == ["Also live", "Draft", "Live"]


def test_search_job_seekers_includes_activity(db_session, populated):
    _, seeker = populated
    [(user, profile, applications, saved)] = ar.search_job_seekers(db_session, "phone_number", "98765")
    assert user.id == seeker.id
    assert [job.job_title for _, job in applications] == ["Live"]
    assert [job.job_title for _, job in saved] == ["Also live"]


def test_empty_query_returns_nothing(db_session, populated):
    assert ar.search_employers(db_session, "email", "  ") == []
    assert ar.search_job_seekers(db_session, "full_name", "") == []


def test_unknown_search_type_rejected(db_session):
    with pytest.raises(InvalidOperationError):
        ar.search_employers(db_session, "password", "x")
