# jobsearch/pipeline/composer.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import Session

from db.schemas import Category, Employer, Job, JobBenefitJob, JobSkill, Skill
from jobsearch.filters.dates import as_utc, resolve_date_window
from jobsearch.filters.experience import build_experience_pattern
from jobsearch.filters.salary import SalaryRange, parse_salary_range
from jobsearch.filters.skills import skill_slugs
from jobsearch.log import get_logger
from jobsearch.models.filters import FilterCriteria

log = get_logger(__name__)

PUBLISHED = "published"


@dataclass(frozen=True)
class QuerySpec:
    statement: Select
    page: int
    per_page: int
    # names of the filter dimensions that contributed a predicate
    dimensions: tuple[str, ...] = ()


@dataclass
class Page:
    rows: list[Any]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def ids(self) -> list[int]:
        return [row.Job.id for row in self.rows]


def base_query() -> Select:
    """Published jobs joined with the employer/category columns the cards show."""
    return (
        select(
            Job,
            Employer.company_name.label("company_name"),
            Employer.website.label("employer_website"),
            Category.name.label("category_name"),
        )
        .outerjoin(Employer, Employer.id == Job.employer_id)
        .outerjoin(Category, Category.id == Job.category_id)
        .where(Job.status == PUBLISHED)
    )


# ---------------------
# Per-dimension predicates
# ---------------------

def keyword_clause(term: str):
    return or_(
        Job.title.icontains(term, autoescape=True),
        Job.description.icontains(term, autoescape=True),
    )


def salary_clause(rng: SalaryRange):
    """
    Overlap of the requested range with the posting's own pay range.
    A posting with only one known bound is judged on that bound alone;
    a posting with no pay data never matches.
    """
    lo, hi = rng.min, rng.max
    if lo is not None and hi is not None:
        return or_(
            and_(
                Job.pay_min.is_not(None), Job.pay_max.is_not(None),
                Job.pay_min <= hi, Job.pay_max >= lo,
            ),
            and_(Job.pay_min.is_not(None), Job.pay_max.is_(None), Job.pay_min.between(lo, hi)),
            and_(Job.pay_min.is_(None), Job.pay_max.is_not(None), Job.pay_max.between(lo, hi)),
        )
    if lo is not None:
        # "180k+": either known bound reaching the floor
        return or_(
            and_(Job.pay_min.is_not(None), Job.pay_min >= lo),
            and_(Job.pay_max.is_not(None), Job.pay_max >= lo),
        )
    return or_(
        and_(Job.pay_min.is_not(None), Job.pay_min <= hi),
        and_(Job.pay_max.is_not(None), Job.pay_max <= hi),
    )


def country_clause(countries: list[str]):
    return or_(
        Job.country_code.in_([c.upper() for c in countries]),
        Job.country_name.in_(countries),
    )


def skills_clause(names: list[str]):
    matching_jobs = (
        select(JobSkill.job_id)
        .join(Skill, Skill.id == JobSkill.skill_id)
        .where(or_(Skill.slug.in_(skill_slugs(names)), Skill.name.in_(names)))
    )
    return Job.id.in_(matching_jobs)


def benefit_clause(benefit_id: int):
    return (
        select(JobBenefitJob.id)
        .where(JobBenefitJob.job_id == Job.id, JobBenefitJob.job_benefit_id == benefit_id)
        .exists()
    )


def compose(criteria: FilterCriteria, now: datetime | None = None) -> QuerySpec:
    """AND together one predicate per filter dimension present in ``criteria``."""
    now = as_utc(now or datetime.now(timezone.utc))
    stmt = base_query()
    used: list[str] = []

    def add(name: str, clause) -> None:
        nonlocal stmt
        stmt = stmt.where(clause)
        used.append(name)

    # Regex scan over descriptions is the slowest predicate; only added when asked for
    if criteria.experience_level:
        pattern = build_experience_pattern(criteria.experience_level)
        if pattern:
            add("experience", func.lower(Job.description).regexp_match(pattern))
        else:
            log.debug("unrecognized experience level %r", criteria.experience_level)

    if criteria.search:
        add("search", keyword_clause(criteria.search))

    if criteria.job_type:
        add("job_type", Job.job_type.icontains(criteria.job_type, autoescape=True))

    if criteria.benefit_id:
        add("benefit", benefit_clause(criteria.benefit_id))

    if criteria.category_id:
        add("category", Job.category_id == criteria.category_id)

    if criteria.countries:
        add("country", country_clause(criteria.countries))

    if criteria.salary:
        rng = parse_salary_range(criteria.salary)
        if rng:
            add("salary", salary_clause(rng))
        else:
            log.debug("unparseable salary %r", criteria.salary)

    if criteria.skills:
        add("skills", skills_clause(criteria.skills))

    if criteria.date_posted:
        since = resolve_date_window(criteria.date_posted, now)
        if since:
            add("date_posted", Job.posted_at >= since)

    if criteria.employer_id:
        add("company", Job.employer_id == criteria.employer_id)

    if criteria.sort == "oldest":
        stmt = stmt.order_by(Job.posted_at.asc(), Job.id.asc())
    else:
        stmt = stmt.order_by(Job.posted_at.desc(), Job.id.desc())

    log.debug("composed search over dimensions=%s", used)
    return QuerySpec(stmt, page=criteria.page, per_page=criteria.per_page, dimensions=tuple(used))


def paginate(sess: Session, spec: QuerySpec) -> Page:
    """One COUNT and one LIMIT/OFFSET fetch; pages past the end come back empty."""
    counted = select(func.count()).select_from(spec.statement.order_by(None).subquery())
    total = sess.execute(counted).scalar_one()
    offset = (spec.page - 1) * spec.per_page
    rows = sess.execute(spec.statement.limit(spec.per_page).offset(offset)).all()
    return Page(rows=list(rows), total=total, page=spec.page, per_page=spec.per_page)
