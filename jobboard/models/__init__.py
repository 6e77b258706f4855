from jobboard.models.user import User
from jobboard.models.employer_profile import EmployerProfile
from jobboard.models.job_seeker_profile import JobSeekerProfile, EducationDetail, ExperienceDetail
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication
from jobboard.models.saved_job import SavedJob
from jobboard.models.candidate import CandidateWatchlistEntry, SavedSearch

__all__ = [
    "User",
    "EmployerProfile",
    "JobSeekerProfile",
    "EducationDetail",
    "ExperienceDetail",
    "Job",
    "JobApplication",
    "SavedJob",
    "CandidateWatchlistEntry",
    "SavedSearch",
]
