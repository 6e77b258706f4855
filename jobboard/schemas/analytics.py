from pydantic import BaseModel

from jobboard.models.types import JobStatus


class KeyMetrics(BaseModel):
    total_active_jobs: int
    total_jobs_ever_posted: int
    total_applications_ever_received: int
    applications_in_period: int | None = None


class TrendPoint(BaseModel):
    date: str  # e.g. "Oct 5"
    count: int


class FunnelStage(BaseModel):
    stage: str
    count: int


class TopJob(BaseModel):
    id: str
    title: str
    status: JobStatus
    applications: int
    hired: int
