# jobsearch/pipeline/aggregator.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.schemas import JobApplication, JobBenefit, JobBenefitJob, JobSeeker, SavedJob
from jobsearch.log import get_logger
from jobsearch.models.filters import ViewerIdentity

log = get_logger(__name__)


@dataclass
class Aggregates:
    applied: dict[int, bool] = field(default_factory=dict)
    saved: dict[int, bool] = field(default_factory=dict)
    benefits: dict[int, list[str]] = field(default_factory=dict)


def resolve_seeker_id(sess: Session, viewer: Optional[ViewerIdentity]) -> Optional[int]:
    if viewer is None:
        return None
    if viewer.seeker_id is not None:
        return viewer.seeker_id
    return sess.execute(
        select(JobSeeker.id).where(JobSeeker.user_id == viewer.user_id)
    ).scalar_one_or_none()


def load_applied(sess: Session, job_ids: list[int], seeker_id: int) -> dict[int, bool]:
    rows = sess.execute(
        select(JobApplication.job_id, JobApplication.created_at)
        .where(JobApplication.job_seeker_id == seeker_id, JobApplication.job_id.in_(job_ids))
        .order_by(JobApplication.created_at.desc())
    ).all()
    # newest application per job wins; only its presence is exposed
    latest: dict[int, object] = {}
    for job_id, created_at in rows:
        latest.setdefault(job_id, created_at)
    return {job_id: True for job_id in latest}


def load_saved(sess: Session, job_ids: list[int], seeker_id: int) -> dict[int, bool]:
    rows = sess.execute(
        select(SavedJob.job_id)
        .where(SavedJob.job_seeker_id == seeker_id, SavedJob.job_id.in_(job_ids))
    ).scalars()
    return {job_id: True for job_id in rows}


def load_benefits(sess: Session, job_ids: list[int]) -> dict[int, list[str]]:
    rows = sess.execute(
        select(JobBenefitJob.job_id, JobBenefit.name)
        .join(JobBenefit, JobBenefit.id == JobBenefitJob.job_benefit_id)
        .where(JobBenefitJob.job_id.in_(job_ids))
        .order_by(JobBenefit.name)
    ).all()
    by_job: dict[int, list[str]] = {}
    for job_id, name in rows:
        by_job.setdefault(job_id, []).append(name)
    return by_job


class BatchAggregator:
    """
    Loads applied/saved/benefit lookups for a whole page of jobs, one query
    per lookup kind regardless of page size.

    With ``workers > 1`` and a ``session_factory`` the three lookups run on a
    thread pool, each on its own session; otherwise they run in order on ``sess``.
    """

    def __init__(
        self,
        sess: Session,
        session_factory: Optional[Callable[[], Session]] = None,
        workers: int = 1,
    ):
        self.sess = sess
        self.session_factory = session_factory
        self.workers = workers

    def load(self, job_ids: Iterable[int], viewer: Optional[ViewerIdentity] = None) -> Aggregates:
        ids = sorted(set(job_ids))
        if not ids:
            return Aggregates()

        # A viewer without a seeker profile simply has nothing applied or saved
        seeker_id = resolve_seeker_id(self.sess, viewer)
        if viewer is not None and seeker_id is None:
            log.debug("viewer user_id=%s has no seeker profile", viewer.user_id)

        tasks: dict[str, Callable[[Session], dict]] = {
            "benefits": lambda s: load_benefits(s, ids),
        }
        if seeker_id is not None:
            tasks["applied"] = lambda s: load_applied(s, ids, seeker_id)
            tasks["saved"] = lambda s: load_saved(s, ids, seeker_id)

        if self.workers > 1 and self.session_factory is not None:
            results = self._run_parallel(tasks)
        else:
            results = {name: fn(self.sess) for name, fn in tasks.items()}

        agg = Aggregates(
            applied=results.get("applied", {}),
            saved=results.get("saved", {}),
            benefits=results["benefits"],
        )
        log.debug(
            "aggregates for %d jobs: applied=%d saved=%d with_benefits=%d",
            len(ids), len(agg.applied), len(agg.saved), len(agg.benefits),
        )
        return agg

    def _run_parallel(self, tasks: dict[str, Callable[[Session], dict]]) -> dict[str, dict]:
        def run(fn: Callable[[Session], dict]) -> dict:
            with self.session_factory() as s:
                return fn(s)

        with ThreadPoolExecutor(max_workers=min(self.workers, len(tasks))) as pool:
            futures = {name: pool.submit(run, fn) for name, fn in tasks.items()}
            # .result() re-raises a store failure from any lookup
            return {name: fut.result() for name, fut in futures.items()}
