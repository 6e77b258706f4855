from datetime import datetime, timezone

import jobboard.routers.job_seeker as seeker_mod
from jobboard.core.errors import NotFoundError
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.job_seeker_profile import JobSeekerProfile
from jobboard.models.saved_job import SavedJob
from jobboard.models.types import ApplicationStatus, JobStatus

NOW = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)
PDF = "data:application/pdf;base64,JVBERi0xLjQK"


class _Company:
    company_name = "Acme Corp"
    company_logo_url = None
    company_website = None
    about_company = None
    year_of_establishment = None
    team_size = None
    linkedin_url = None
    address = None


def _job(**overrides):
    fields = {"id": "j1", "job_title": "Backend Engineer", "job_location": "Pune", "status": JobStatus.ACTIVE}
    fields.update(overrides)
    return Job(**fields)


def test_my_applications(monkeypatch, seeker_client):
    application = JobApplication(
        id="a1",
        applied_at=NOW,
        status=ApplicationStatus.SHORTLISTED,
        employer_remarks="Strong profile",
        custom_question_answers=[{"question_text": "Relocate?", "answer": "yes"}],
    )
    monkeypatch.setattr(
        seeker_mod.application_repo, "list_for_seeker", lambda db, uid: [(application, _job(), _Company())]
    )
    resp = seeker_client.get("/job-seeker/applications")
    assert resp.status_code == 200
    [item] = resp.json()["data"]
    assert item["company_name"] == "Acme Corp"
    assert item["status"] == "shortlisted"
    assert item["employer_remarks"] == "Strong profile"


def test_applications_require_job_seeker(employer_client):
    assert employer_client.get("/job-seeker/applications").status_code == 403


def test_withdraw_application(monkeypatch, seeker_client):
    monkeypatch.setattr(seeker_mod.application_repo, "withdraw", lambda db, application_id, uid: None)
    resp = seeker_client.delete("/job-seeker/applications/a1")
    assert resp.json() == {"success": True, "message": "Application withdrawn successfully.", "data": None}


def test_withdraw_someone_elses_application(monkeypatch, seeker_client):
    def _withdraw(db, application_id, uid):
        raise NotFoundError("Application not found or you do not have permission to withdraw it.")

    monkeypatch.setattr(seeker_mod.application_repo, "withdraw", _withdraw)
    resp = seeker_client.delete("/job-seeker/applications/a1")
    assert resp.status_code == 404


def test_saved_jobs(monkeypatch, seeker_client):
    rows = [
        (SavedJob(saved_at=NOW), _job(), None, True),
        (SavedJob(saved_at=NOW), _job(id="j2", company_name="Initech", status=JobStatus.CLOSED), None, False),
    ]
    monkeypatch.setattr(seeker_mod.saved_job_repo, "list_for_seeker", lambda db, uid: rows)
    data = seeker_client.get("/job-seeker/saved-jobs").json()["data"]
    assert [(j["job_id"], j["company_name"], j["status"], j["is_applied"]) for j in data] == [
        ("j1", "Company Information Unavailable", "active", True),
        ("j2", "Initech", "closed", False),
    ]


def test_get_profile_empty(monkeypatch, seeker_client):
    monkeypatch.setattr(seeker_mod, "get_by_user_id", lambda db, uid: None)
    assert seeker_client.get("/job-seeker/profile").json()["data"] is None


def test_get_profile(monkeypatch, seeker_client):
    profile = JobSeekerProfile(id="p1", user_id="seeker-1", full_name="Asha Rao", skills=["Python"])
    monkeypatch.setattr(seeker_mod, "get_by_user_id", lambda db, uid: profile)
    data = seeker_client.get("/job-seeker/profile").json()["data"]
    assert data["full_name"] == "Asha Rao"
    assert data["email"] == "seeker@example.com"
    assert data["skills"] == ["Python"]
    assert data["preferred_locations"] == []
    assert data["educational_details"] == []


def test_update_profile(monkeypatch, seeker_client):
    seen = {}

    def _save(db, uid, data):
        seen["data"] = data
        return JobSeekerProfile(id="p1", user_id=uid, full_name=data.full_name)

    monkeypatch.setattr(seeker_mod, "save_profile", _save)
    resp = seeker_client.put(
        "/job-seeker/profile",
        json={"full_name": "Asha Rao", "current_pin_code": "", "portfolio_url": "www.asha.dev"},
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Profile saved successfully."
    assert seen["data"].current_pin_code is None
    assert seen["data"].portfolio_url == "https://www.asha.dev"


def test_update_profile_validation_messages(seeker_client):
    resp = seeker_client.put(
        "/job-seeker/profile",
        json={
            "current_pin_code": "12345",
            "date_of_birth": "12-04-1996",
            "experience_details": [
                {"company_name": "Acme", "designation": "Engineer", "start_date": "05-2021", "end_date": "01-2020"}
            ],
        },
    )
    assert resp.status_code == 422
    errors = {e["field"]: e["message"] for e in resp.json()["validation_errors"]}
    assert errors["current_pin_code"] == "Invalid Pin Code (6 digits)."
    assert errors["date_of_birth"] == "Invalid date format. Please use YYYY-MM-DD."
    assert errors["experience_details.0"] == "End date must be after start date for past experiences."


def test_update_resume(monkeypatch, seeker_client):
    monkeypatch.setattr(
        seeker_mod, "update_resume", lambda db, uid, url: (JobSeekerProfile(resume_url=url), False)
    )
    added = seeker_client.put("/job-seeker/profile/resume", json={"resume_url": PDF})
    removed = seeker_client.put("/job-seeker/profile/resume", json={"resume_url": None})
    assert added.json()["message"] == "Resume updated successfully."
    assert added.json()["data"] == {"resume_url": PDF}
    assert removed.json()["message"] == "Resume removed."


def test_update_resume_rejects_oversized_pdf(monkeypatch, seeker_client):
    monkeypatch.setattr("jobboard.schemas.common.settings.max_resume_upload_kb", 0)
    resp = seeker_client.put("/job-seeker/profile/resume", json={"resume_url": PDF})
    assert resp.status_code == 422
    assert resp.json()["validation_errors"][0]["message"] == "PDF uploads must be 0KB or smaller."


def test_update_resume_rejects_garbage(seeker_client):
    resp = seeker_client.put("/job-seeker/profile/resume", json={"resume_url": "data:application/pdf;base64,%%%"})
    assert resp.status_code == 422
    assert resp.json()["validation_errors"][0]["message"] == "Invalid PDF data."
