# jobsearch/pipeline/service.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.schemas import Category, Employer, Job, JobBenefit, User
from jobsearch.errors import JobNotFound
from jobsearch.log import get_logger
from jobsearch.models.filters import FilterCriteria, ViewerIdentity
from jobsearch.models.posting import (
    BenefitItem, CategoryItem, EmployerItem, HeroStats, Pagination, PostingDTO, SearchPage,
)
from jobsearch.pipeline.aggregator import BatchAggregator
from jobsearch.pipeline.composer import PUBLISHED, base_query, compose, paginate
from jobsearch.pipeline.shaper import shape
from jobsearch.settings import settings

log = get_logger(__name__)


class SearchService:
    """
    Read-side entry point: search, single job detail and hero stats.

    Store errors (``SQLAlchemyError``) are logged and re-raised as they are;
    the whole request fails rather than returning partial data.
    """

    def __init__(
        self,
        sess: Session,
        session_factory: Optional[Callable[[], Session]] = None,
        aggregate_workers: Optional[int] = None,
    ):
        self.sess = sess
        self.aggregator = BatchAggregator(
            sess,
            session_factory=session_factory,
            workers=settings.AGGREGATE_WORKERS if aggregate_workers is None else aggregate_workers,
        )

    def search(
        self,
        criteria: FilterCriteria,
        viewer: Optional[ViewerIdentity] = None,
        now: Optional[datetime] = None,
    ) -> SearchPage:
        now = now or datetime.now(timezone.utc)
        try:
            benefits, categories, employers = self.static_lookups()
            spec = compose(criteria, now)
            page = paginate(self.sess, spec)
            aggregates = self.aggregator.load(page.ids, viewer)
        except SQLAlchemyError as e:
            log.error("search failed: %s", e)
            raise

        data = [shape(row, aggregates, now) for row in page.rows]
        log.info(
            "search dims=%s page=%d/%d total=%d returned=%d",
            ",".join(spec.dimensions) or "-", page.page, page.last_page, page.total, len(data),
        )
        return SearchPage(
            data=data,
            benefits=benefits,
            categories=categories,
            employers=employers,
            pagination=Pagination(
                current_page=page.page,
                total_pages=page.last_page,
                total_jobs=page.total,
            ),
        )

    def get_job(
        self,
        job_id: int,
        viewer: Optional[ViewerIdentity] = None,
        now: Optional[datetime] = None,
    ) -> PostingDTO:
        now = now or datetime.now(timezone.utc)
        try:
            row = self.sess.execute(base_query().where(Job.id == job_id)).first()
            if row is None:
                raise JobNotFound(job_id)
            aggregates = self.aggregator.load([row.Job.id], viewer)
        except SQLAlchemyError as e:
            log.error("job %s lookup failed: %s", job_id, e)
            raise
        return shape(row, aggregates, now)

    def static_lookups(self) -> tuple[list[BenefitItem], list[CategoryItem], list[EmployerItem]]:
        """Filter dropdown contents, each ordered by name."""
        benefits = self.sess.execute(select(JobBenefit.id, JobBenefit.name).order_by(JobBenefit.name)).all()
        categories = self.sess.execute(select(Category.id, Category.name).order_by(Category.name)).all()
        employers = self.sess.execute(
            select(Employer.id, Employer.company_name).order_by(Employer.company_name)
        ).all()
        return (
            [BenefitItem(id=r.id, name=r.name) for r in benefits],
            [CategoryItem(id=r.id, name=r.name) for r in categories],
            [EmployerItem(id=r.id, company_name=r.company_name) for r in employers],
        )

    def hero_stats(self, published: bool = True) -> HeroStats:
        jobs = select(func.count(Job.id))
        hiring = select(func.count(func.distinct(Job.employer_id))).where(Job.employer_id.is_not(None))
        if published:
            jobs = jobs.where(Job.status == PUBLISHED)
            hiring = hiring.where(Job.status == PUBLISHED)

        def users_with(role: str):
            return select(func.count(User.id)).where(User.role == role)

        try:
            stats = HeroStats(
                total_jobs=self.sess.execute(jobs).scalar_one(),
                total_seekers=self.sess.execute(users_with("seeker")).scalar_one(),
                total_employers=self.sess.execute(users_with("employer")).scalar_one(),
                companies_hiring=self.sess.execute(hiring).scalar_one(),
            )
        except SQLAlchemyError as e:
            log.error("hero stats failed: %s", e)
            raise
        return stats
