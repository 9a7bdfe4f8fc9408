import math
import time
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from jobsearch.errors import JobNotFound
from jobsearch.models.filters import FilterCriteria, ViewerIdentity
from jobsearch.pipeline.service import SearchService
from tests.factories import NOW, make_job


@pytest.fixture
def service(sess):
    return SearchService(sess, aggregate_workers=1)


def test_search_envelope(service, board):
    viewer = ViewerIdentity(user_id=board["seeker_user"].id)
    page = service.search(FilterCriteria(), viewer, NOW)

    assert [d.title for d in page.data] == [
        "Data Intern", "Senior Python Engineer", "Platform Engineer", "Junior Support Analyst",
    ]
    assert [b.name for b in page.benefits] == ["Dental", "Health insurance", "Remote stipend"]
    assert [c.name for c in page.categories] == ["Engineering", "Operations"]
    assert [e.company_name for e in page.employers] == ["Acme", "Globex"]
    assert page.pagination.model_dump() == {"current_page": 1, "total_pages": 1, "total_jobs": 4}

    by_title = {d.title: d for d in page.data}
    senior = by_title["Senior Python Engineer"]
    assert senior.has_applied and not senior.is_saved
    assert senior.benefits == ["Dental", "Health insurance", "Remote stipend"]
    assert senior.company.location == "Austin, TX, US"
    assert senior.tags == ["Featured", "Full-Time"]
    assert by_title["Platform Engineer"].is_saved
    assert by_title["Platform Engineer"].company.location == "Remote"
    assert by_title["Junior Support Analyst"].application_link is None


def test_search_store_round_trips_are_constant(service, board, statements):
    viewer = ViewerIdentity(user_id=board["seeker_user"].id)
    counts = []
    for per_page in (1, 2, 4):
        statements.clear()
        service.search(FilterCriteria(per_page=per_page), viewer, NOW)
        counts.append(len(statements))
    # 3 lookups + count + page + seeker + applied + saved + benefits
    assert counts == [9, 9, 9]


def test_search_is_idempotent(service, board):
    criteria = FilterCriteria.from_params({"salary": "$100k - $200k", "sort": "oldest"})
    first = service.search(criteria, None, NOW).model_dump(mode="json")
    assert first == service.search(criteria, None, NOW).model_dump(mode="json")


@pytest.mark.parametrize("per_page", [1, 3, 4, 10])
def test_pagination_block_is_consistent(service, board, per_page):
    page = service.search(FilterCriteria(per_page=per_page, page=2), None, NOW)
    p = page.pagination
    assert p.total_jobs == 4
    assert p.total_pages == max(1, math.ceil(4 / per_page))
    assert p.current_page == 2
    assert len(page.data) == max(0, min(per_page, 4 - per_page))


def test_empty_result(service, board):
    page = service.search(FilterCriteria(search="astronaut"), None, NOW)
    assert page.data == []
    assert page.pagination.model_dump() == {"current_page": 1, "total_pages": 1, "total_jobs": 0}


def test_get_job(service, board):
    senior = board["jobs"]["senior"]
    viewer = ViewerIdentity(user_id=board["seeker_user"].id)
    dto = service.get_job(senior.id, viewer, NOW)
    assert dto.id == senior.id
    assert dto.has_applied and not dto.is_saved
    assert dto.salary_range == "$160k - $200k"
    assert dto.application_link == "https://acme.example/jobs"
    assert dto.overview == "We need 5+ years of Python. You will lead a team. Remote friendly."


@pytest.mark.parametrize("name", ["draft", None])
def test_get_job_not_found(service, board, name):
    job_id = board["jobs"][name].id if name else 9999
    with pytest.raises(JobNotFound) as exc:
        service.get_job(job_id, None, NOW)
    assert exc.value.job_id == job_id


def test_hero_stats(service, board):
    assert service.hero_stats().model_dump() == {
        "total_jobs": 4, "total_seekers": 2, "total_employers": 1, "companies_hiring": 2,
    }
    stats = service.hero_stats(published=False)
    assert stats.total_jobs == 5
    assert stats.companies_hiring == 2


def test_store_failure_propagates(service, board, engine):
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE job_benefit_job"))
    with pytest.raises(OperationalError):
        service.search(FilterCriteria(), None, NOW)


@pytest.fixture
def new_york_host(monkeypatch):
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_naive_now_is_utc_for_filter_and_flags(service, sess, new_york_host):
    make_job(sess, title="Edge", posted_at=NOW - timedelta(days=6, hours=22))
    sess.commit()

    page = service.search(FilterCriteria(date_posted="7d"), None, datetime(2024, 3, 10))

    assert [d.title for d in page.data] == ["Edge"]
    assert page.data[0].is_new
    assert page.data[0].posted_at == datetime(2024, 3, 3, 2, tzinfo=timezone.utc)
