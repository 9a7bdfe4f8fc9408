from datetime import datetime, timedelta, timezone

from db.schemas import Job

NOW = datetime(2024, 3, 10, tzinfo=timezone.utc)


def make_job(sess, **kw):
    defaults = dict(
        title="Backend Engineer",
        description="Build APIs.",
        job_type="full_time",
        location_type="onsite",
        country_code="US",
        country_name="United States",
        status="published",
        posted_at=NOW - timedelta(days=30),
    )
    defaults.update(kw)
    job = Job(**defaults)
    sess.add(job)
    sess.flush()
    return job
