# jobsearch/pipeline/shaper.py
"""
Turn a joined job row into the card/detail payload.

Everything here is a pure function of the row, the page's aggregate lookups
and ``now``. The overview/requirements/responsibilities split is positional
sentence slicing of the description, not any kind of language analysis.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from jobsearch.filters.dates import as_utc
from jobsearch.models.posting import CompanyInfo, PostingDTO
from jobsearch.pipeline.aggregator import Aggregates
from jobsearch.settings import settings

JOB_TYPE_LABELS = {
    "full_time": "Full-Time",
    "part_time": "Part-Time",
    "temporary": "Temporary",
    "contract": "Contract",
    "internship": "Internship",
    "fresher": "Fresher",
}

_SENTENCE_END = re.compile(r"\.(?:\s+|$)")


def humanize_job_type(job_type: Optional[str]) -> str:
    if not job_type:
        return ""
    label = JOB_TYPE_LABELS.get(job_type)
    if label:
        return label
    s = job_type.replace("_", " ")
    return s[:1].upper() + s[1:]


def _thousands(value: float) -> str:
    k = Decimal(str(value)) / 1000
    return f"${int(k.quantize(Decimal('1'), rounding=ROUND_HALF_UP)):,}k"


def format_salary_range(pay_min: Optional[float], pay_max: Optional[float]) -> Optional[str]:
    """(50000, 80000) -> "$50k - $80k"; a single known bound renders alone."""
    if pay_min is None and pay_max is None:
        return None
    lo = _thousands(pay_min) if pay_min is not None else None
    hi = _thousands(pay_max) if pay_max is not None else None
    if lo and hi:
        return f"{lo} - {hi}"
    return lo or hi


def company_location(job: Any) -> Optional[str]:
    if job.location_type == "remote":
        return "Remote"
    joined = ", ".join(p for p in (job.city, job.state_province, job.country_code) if p).strip()
    return joined or job.country_code


def split_sentences(description: Optional[str]) -> list[str]:
    if not description:
        return []
    return [s for s in _SENTENCE_END.split(description) if s]


def overview_from(description: Optional[str]) -> str:
    """First three sentences, re-joined."""
    if not description:
        return ""
    return ". ".join(split_sentences(description)[:3]) + "."


def requirements_from(description: Optional[str]) -> list[str]:
    return [s.strip() for s in split_sentences(description)[:5]]


def responsibilities_from(description: Optional[str]) -> list[str]:
    return [s.strip() for s in split_sentences(description)[5:10]]


def shape(row: Any, aggregates: Aggregates, now: datetime) -> PostingDTO:
    """
    ``row`` carries ``Job`` plus the joined ``company_name``,
    ``employer_website`` and ``category_name`` columns.
    """
    job = row.Job
    now = as_utc(now)
    posted_at = as_utc(job.posted_at or job.created_at)
    closed_at = as_utc(job.closed_at)

    is_new = bool(posted_at and posted_at >= now - timedelta(days=settings.NEW_WINDOW_DAYS))
    is_featured = (
        (job.pay_max is not None and job.pay_max >= settings.FEATURED_PAY_THRESHOLD)
        or (is_new and job.job_type == "full_time")
    )

    tags = []
    if is_featured:
        tags.append("Featured")
    if job.job_type:
        tags.append(humanize_job_type(job.job_type))
    if job.location_type == "remote":
        tags.append("Remote")

    website = row.employer_website
    company = CompanyInfo(
        name=row.company_name or "Unknown Company",
        location=company_location(job),
        website=website,
    )

    return PostingDTO(
        id=int(job.id),
        title=job.title,
        company=company,
        vacancies=job.vacancies,
        job_type=humanize_job_type(job.job_type),
        salary_range=format_salary_range(job.pay_min, job.pay_max),
        tags=tags,
        is_featured=is_featured,
        is_new=is_new,
        posted_at=posted_at,
        closed_at=closed_at,
        description=job.description or "",
        overview=overview_from(job.description),
        requirements=requirements_from(job.description),
        responsibilities=responsibilities_from(job.description),
        benefits=aggregates.benefits.get(job.id, []),
        application_link=website or None,
        has_applied=aggregates.applied.get(job.id, False),
        is_saved=aggregates.saved.get(job.id, False),
    )
