"""
Job Board Reducers

Pure updates over the list of backend crawl jobs and the dashboard
summary derived from it.
"""

from typing import Any

from crawl_console.models.backend import CrawlJob, JobSummary

RECENT_JOBS_LIMIT = 5


def set_jobs(jobs: list[CrawlJob]) -> list[CrawlJob]:
    return list(jobs)


def add_job(jobs: list[CrawlJob], job: CrawlJob) -> list[CrawlJob]:
    return [*jobs, job]


def update_job(
    jobs: list[CrawlJob], job_id: str, changes: dict[str, Any]
) -> list[CrawlJob]:
    """Merge `changes` into the job with `job_id`; unknown ids leave the list as is."""
    result = []
    for job in jobs:
        if job.id == job_id:
            job = CrawlJob.model_validate({**job.model_dump(), **changes})
        result.append(job)
    return result


def summarize_jobs(jobs: list[CrawlJob], error: str | None = None) -> JobSummary:
    return JobSummary(
        total=len(jobs),
        active=sum(1 for job in jobs if job.status == "running"),
        completed=sum(1 for job in jobs if job.status == "completed"),
        failed=sum(1 for job in jobs if job.status == "failed"),
        recent=jobs[:RECENT_JOBS_LIMIT],
        error=error,
    )
