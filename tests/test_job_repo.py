import pytest

from jobboard.core.errors import InvalidOperationError, NotFoundError
from jobboard.models.job_application import JobApplication
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import JobStatus, UserRole
from jobboard.models.job import Job
from jobboard.repos import application_repo, job_repo, saved_job_repo
from tests.factories import application_form, job_form


def test_save_copies_company_name_from_profile(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER, company_name="Acme Corp")
    job = job_repo.save(db_session, employer.id, job_form())
    assert job.company_name == "Acme Corp"
    assert job.status == JobStatus.DRAFT
    assert job.skills_required == ["Python", "SQL"]


def test_save_stores_other_industry_type(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER)
    job = job_repo.save(
        db_session, employer.id, job_form(industry_type="Other", other_industry_type="  Agritech ")
    )
    assert job.industry_type == "Agritech"


def test_save_requires_company_profile(db_session, make_user):
    seeker = make_user("someone@example.com")
    with pytest.raises(InvalidOperationError, match="complete your company profile"):
        job_repo.save(db_session, seeker.id, job_form())


def test_update_by_other_employer_is_not_found(db_session, make_user):
    owner = make_user("owner@acme.example", UserRole.EMPLOYER)
    other = make_user("other@globex.example", UserRole.EMPLOYER)
    job = job_repo.save(db_session, owner.id, job_form())
    with pytest.raises(NotFoundError, match="permission to edit"):
        job_repo.save(db_session, other.id, job_form(job_title="Hijacked"), job_id=job.id)


def test_list_by_status_filters_and_rejects_unknown(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER)
    job_repo.save(db_session, employer.id, job_form(job_title="Draft role"))
    job_repo.save(db_session, employer.id, job_form(job_title="Live role", status="active"))

    assert len(job_repo.list_by_status(db_session, employer.id)) == 2
    active = job_repo.list_by_status(db_session, employer.id, "active")
    assert [j.job_title for j in active] == ["Live role"]
    with pytest.raises(InvalidOperationError, match="Invalid job status filter: posted"):
        job_repo.list_by_status(db_session, employer.id, "posted")


def test_update_status_any_to_any_but_not_same(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER)
    job = job_repo.save(db_session, employer.id, job_form())

    assert job_repo.update_status(db_session, job.id, employer.id, JobStatus.CLOSED).status == JobStatus.CLOSED
    assert job_repo.update_status(db_session, job.id, employer.id, JobStatus.ACTIVE).status == JobStatus.ACTIVE
    assert job_repo.update_status(db_session, job.id, employer.id, JobStatus.DRAFT).status == JobStatus.DRAFT
    with pytest.raises(InvalidOperationError, match="Job is already draft."):
        job_repo.update_status(db_session, job.id, employer.id, JobStatus.DRAFT)


def test_delete_removes_applications_and_saved_rows(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER)
    applicant = make_user("applicant@example.com")
    bookmarker = make_user("bookmarker@example.com")
    job = job_repo.save(db_session, employer.id, job_form(status="active"))
    application_repo.submit(db_session, job.id, applicant.id, application_form())
    saved_job_repo.save(db_session, bookmarker.id, job.id)

    removed = job_repo.delete(db_session, job.id, employer.id)

    assert removed == {"applications": 1, "saved_jobs": 1}
    assert db_session.query(Job).count() == 0
    assert db_session.query(JobApplication).count() == 0
    assert db_session.query(SavedJob).count() == 0


def test_delete_not_owned_leaves_everything(db_session, make_user):
    owner = make_user("owner@acme.example", UserRole.EMPLOYER)
    other = make_user("other@globex.example", UserRole.EMPLOYER)
    job = job_repo.save(db_session, owner.id, job_form())
    with pytest.raises(NotFoundError):
        job_repo.delete(db_session, job.id, other.id)
    assert db_session.query(Job).count() == 1


def test_application_counts_include_jobs_without_applications(db_session, make_user):
    employer = make_user("hr@acme.example", UserRole.EMPLOYER)
    seeker = make_user("seeker@example.com")
    busy = job_repo.save(db_session, employer.id, job_form(job_title="Busy", status="active"))
    job_repo.save(db_session, employer.id, job_form(job_title="Quiet"))
    application_repo.submit(db_session, busy.id, seeker.id, application_form())

    counts = {job.job_title: n for job, n in job_repo.list_with_application_counts(db_session, employer.id)}
    assert counts == {"Busy": 1, "Quiet": 0}
