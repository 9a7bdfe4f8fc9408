from datetime import timedelta

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from db.base import Base
from db.schemas import (
    Category, Employer, JobApplication, JobBenefit, JobBenefitJob, JobSeeker,
    JobSkill, SavedJob, Skill, User,
)
from tests.factories import NOW, make_job


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", future=True)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def sess(engine):
    s = sessionmaker(bind=engine, expire_on_commit=False)()
    yield s
    s.close()


@pytest.fixture
def statements(engine):
    """Every SQL statement the engine sends, in order."""
    seen: list[str] = []

    @event.listens_for(engine, "before_cursor_execute")
    def _record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    return seen

@pytest.fixture
def board(sess):
    """A small board: two employers, two categories, benefits, skills, one seeker."""
    acme = Employer(company_name="Acme", website="https://acme.example/jobs")
    globex = Employer(company_name="Globex", website=None)
    eng_cat = Category(name="Engineering")
    ops_cat = Category(name="Operations")
    dental = JobBenefit(name="Dental")
    remote_stipend = JobBenefit(name="Remote stipend")
    health = JobBenefit(name="Health insurance")
    python = Skill(name="Python", slug="python")
    nodejs = Skill(name="Node.js", slug="nodejs")
    sess.add_all([acme, globex, eng_cat, ops_cat, dental, remote_stipend, health, python, nodejs])
    sess.flush()

    jobs = {
        "senior": make_job(
            sess, title="Senior Python Engineer", employer_id=acme.id, category_id=eng_cat.id,
            description="We need 5+ years of Python. You will lead a team. Remote friendly.",
            pay_min=160000, pay_max=200000, city="Austin", state_province="TX",
            posted_at=NOW - timedelta(days=2),
        ),
        "mid": make_job(
            sess, title="Platform Engineer", employer_id=acme.id, category_id=eng_cat.id,
            description="Requires 3 years of experience with Node.js.",
            pay_min=90000, pay_max=120000, location_type="remote",
            posted_at=NOW - timedelta(days=10),
        ),
        "junior": make_job(
            sess, title="Junior Support Analyst", employer_id=globex.id, category_id=ops_cat.id,
            description="Entry level role, no experience needed.",
            job_type="part_time", pay_min=40000, country_code="CA", country_name="Canada",
            posted_at=NOW - timedelta(days=40),
        ),
        "intern": make_job(
            sess, title="Data Intern", employer_id=globex.id, category_id=eng_cat.id,
            description="Summer internship.", job_type="internship", pay_max=30000,
            country_code="DE", country_name="Germany", posted_at=NOW - timedelta(hours=5),
        ),
        "draft": make_job(sess, title="Hidden Draft Role", status="draft", employer_id=acme.id),
    }

    sess.add_all([
        JobBenefitJob(job_id=jobs["senior"].id, job_benefit_id=remote_stipend.id),
        JobBenefitJob(job_id=jobs["senior"].id, job_benefit_id=dental.id),
        JobBenefitJob(job_id=jobs["senior"].id, job_benefit_id=health.id),
        JobBenefitJob(job_id=jobs["mid"].id, job_benefit_id=health.id),
        JobSkill(job_id=jobs["senior"].id, skill_id=python.id),
        JobSkill(job_id=jobs["mid"].id, skill_id=nodejs.id),
    ])

    seeker_user = User(name="Sam", role="seeker")
    lonely_user = User(name="Lee", role="seeker")
    boss = User(name="Pat", role="employer")
    sess.add_all([seeker_user, lonely_user, boss])
    sess.flush()
    seeker = JobSeeker(user_id=seeker_user.id)
    sess.add(seeker)
    sess.flush()
    sess.add_all([
        JobApplication(job_id=jobs["senior"].id, job_seeker_id=seeker.id, created_at=NOW - timedelta(days=1)),
        JobApplication(job_id=jobs["senior"].id, job_seeker_id=seeker.id, created_at=NOW),
        SavedJob(job_id=jobs["mid"].id, job_seeker_id=seeker.id),
    ])
    sess.commit()

    return {
        "jobs": jobs,
        "employers": {"acme": acme, "globex": globex},
        "categories": {"eng": eng_cat, "ops": ops_cat},
        "benefits": {"dental": dental, "health": health, "remote_stipend": remote_stipend},
        "seeker_user": seeker_user,
        "lonely_user": lonely_user,
        "seeker": seeker,
    }
