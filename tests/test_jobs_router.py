from datetime import datetime, timezone

import jobboard.routers.jobs as jobs_mod
from jobboard.core.errors import ConflictError, InvalidOperationError
from jobboard.models.types import ApplicationStatus, JobStatus
from jobboard.repos.application_repo import ALREADY_APPLIED_MESSAGE
from jobboard.schemas.job import UNKNOWN_COMPANY
from tests.factories import application_form, job_form


class _Job:
    def __init__(self, **overrides):
        self.id = "j1"
        self.employer_user_id = "employer-1"
        self.company_name = None
        self.created_at = datetime(2026, 10, 1, tzinfo=timezone.utc)
        self.updated_at = None
        self.__dict__.update(job_form().model_dump())
        self.status = JobStatus.ACTIVE
        self.__dict__.update(overrides)


class _Company:
    def __init__(self, company_name="Acme Corp"):
        self.company_name = company_name
        self.company_logo_url = "https://cdn.example.com/acme.png"
        self.company_website = None
        self.about_company = None
        self.year_of_establishment = None
        self.team_size = None
        self.linkedin_url = None
        self.address = None


class _SeekerProfile:
    resume_url = "https://cv.example.com/asha.pdf"


class _Application:
    id = "a1"
    status = ApplicationStatus.SUBMITTED


def _no_flags(db, seeker_id):
    return set(), set()


def test_search_anonymous(monkeypatch, anon_client):
    seen = {}

    def _search(db, **kwargs):
        seen.update(kwargs)
        return [(_Job(), _Company(), None)]

    monkeypatch.setattr(jobs_mod.job_search_repo, "search", _search)
    monkeypatch.setattr(jobs_mod.job_search_repo, "seeker_flags", _no_flags)
    resp = anon_client.get("/jobs?search_term=python&location=Pune")
    assert resp.status_code == 200
    [listing] = resp.json()["data"]
    assert listing["company"]["company_name"] == "Acme Corp"
    assert listing["is_saved"] is False
    assert listing["match_score"] is None
    assert seen["search_term"] == "python"
    assert seen["seeker_user_id"] is None


def test_search_flags_for_seeker(monkeypatch, seeker_client):
    monkeypatch.setattr(
        jobs_mod.job_search_repo,
        "search",
        lambda db, **kw: [(_Job(id="j1"), None, 75), (_Job(id="j2"), None, 0)],
    )
    monkeypatch.setattr(jobs_mod.job_search_repo, "seeker_flags", lambda db, sid: ({"j1"}, {"j2"}))
    data = seeker_client.get("/jobs").json()["data"]
    assert [(j["id"], j["is_saved"], j["is_applied"], j["match_score"]) for j in data] == [
        ("j1", True, False, 75),
        ("j2", False, True, 0),
    ]
    assert data[0]["company"]["company_name"] == UNKNOWN_COMPANY


def test_search_ignores_employer_identity(monkeypatch, employer_client):
    seen = {}

    def _search(db, **kwargs):
        seen.update(kwargs)
        return []

    monkeypatch.setattr(jobs_mod.job_search_repo, "search", _search)
    monkeypatch.setattr(jobs_mod.job_search_repo, "seeker_flags", _no_flags)
    assert employer_client.get("/jobs").status_code == 200
    assert seen["seeker_user_id"] is None


def test_search_failure_sanitized(monkeypatch, anon_client):
    monkeypatch.setattr(
        jobs_mod.job_search_repo, "search", lambda db, **kw: (_ for _ in ()).throw(RuntimeError("db"))
    )
    resp = anon_client.get("/jobs")
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to fetch job listings"


def test_job_detail_unavailable(monkeypatch, anon_client):
    monkeypatch.setattr(jobs_mod.job_search_repo, "get_active", lambda db, job_id: None)
    resp = anon_client.get("/jobs/missing")
    assert resp.status_code == 404
    assert resp.json()["error"] == jobs_mod.JOB_UNAVAILABLE_MESSAGE


def test_job_detail_for_seeker_includes_resume(monkeypatch, seeker_client):
    monkeypatch.setattr(jobs_mod.job_search_repo, "get_active", lambda db, job_id: (_Job(), _Company()))
    monkeypatch.setattr(jobs_mod.job_search_repo, "seeker_flags", lambda db, sid: (set(), {"j1"}))
    monkeypatch.setattr(jobs_mod, "get_seeker_profile", lambda db, uid: _SeekerProfile())
    data = seeker_client.get("/jobs/j1").json()["data"]
    assert data["job_title"] == "Backend Engineer"
    assert data["is_applied"] is True
    assert data["job_seeker_resume_url"] == "https://cv.example.com/asha.pdf"
    assert data["company"]["company_logo_url"] == "https://cdn.example.com/acme.png"


def test_similar_and_company_jobs(monkeypatch, anon_client):
    monkeypatch.setattr(jobs_mod.job_search_repo, "get_active", lambda db, job_id: (_Job(), None))
    monkeypatch.setattr(
        jobs_mod.job_search_repo, "similar", lambda db, job, limit: [(_Job(id="j2"), _Company("Globex"))]
    )
    monkeypatch.setattr(jobs_mod.job_search_repo, "company_jobs", lambda db, job, limit: [])
    similar = anon_client.get("/jobs/j1/similar").json()["data"]
    assert similar == [
        {
            "id": "j2",
            "job_title": "Backend Engineer",
            "company_name": "Globex",
            "company_logo_url": "https://cdn.example.com/acme.png",
            "location": "Pune",
        }
    ]
    assert anon_client.get("/jobs/j1/company-jobs").json()["data"] == []


def test_save_and_unsave_messages(monkeypatch, seeker_client):
    monkeypatch.setattr(jobs_mod.saved_job_repo, "save", lambda db, uid, job_id: True)
    assert seeker_client.post("/jobs/j1/save").json()["message"] == "Job saved successfully."
    monkeypatch.setattr(jobs_mod.saved_job_repo, "save", lambda db, uid, job_id: False)
    assert seeker_client.post("/jobs/j1/save").json()["message"] == "Job is already saved."
    monkeypatch.setattr(jobs_mod.saved_job_repo, "unsave", lambda db, uid, job_id: False)
    assert seeker_client.delete("/jobs/j1/save").json()["message"] == "Job was not in your saved list."


def test_save_inactive_job(monkeypatch, seeker_client):
    def _save(db, uid, job_id):
        raise InvalidOperationError("Cannot save this job. It may no longer be available.")

    monkeypatch.setattr(jobs_mod.saved_job_repo, "save", _save)
    resp = seeker_client.post("/jobs/j1/save")
    assert resp.status_code == 400


def test_save_requires_job_seeker(employer_client):
    resp = employer_client.post("/jobs/j1/save")
    assert resp.status_code == 403
    assert resp.json()["error"] == "This action requires a job seeker account."


def test_apply(monkeypatch, seeker_client):
    monkeypatch.setattr(jobs_mod.application_repo, "submit", lambda db, job_id, uid, data: _Application())
    resp = seeker_client.post("/jobs/j1/apply", json=application_form().model_dump())
    assert resp.status_code == 201
    assert resp.json()["data"] == {"application_id": "a1", "status": "submitted"}


def test_apply_twice_conflicts(monkeypatch, seeker_client):
    def _submit(db, job_id, uid, data):
        raise ConflictError(ALREADY_APPLIED_MESSAGE)

    monkeypatch.setattr(jobs_mod.application_repo, "submit", _submit)
    resp = seeker_client.post("/jobs/j1/apply", json=application_form().model_dump())
    assert resp.status_code == 409
    assert resp.json()["error"] == ALREADY_APPLIED_MESSAGE


def test_apply_validation(seeker_client):
    resp = seeker_client.post(
        "/jobs/j1/apply",
        json={"current_working_location": "", "expected_salary": "10 LPA", "notice_period": -1},
    )
    assert resp.status_code == 422
    fields = sorted(e["field"] for e in resp.json()["validation_errors"])
    assert fields == ["current_working_location", "notice_period"]
