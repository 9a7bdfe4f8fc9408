from sqlalchemy import (
    Column, String, DateTime, Integer, Text, Numeric, ForeignKey, UniqueConstraint, Index,
)
from sqlalchemy.sql import func
from db.base import Base


class Employer(Base):
    __tablename__ = "employers"
    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(200), nullable=False)
    website = Column(String(1000), nullable=True)


class Category(Base):
    __tablename__ = "categories"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)


class JobBenefit(Base):
    __tablename__ = "job_benefits"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)


class JobBenefitJob(Base):
    __tablename__ = "job_benefit_job"
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_benefit_id = Column(Integer, ForeignKey("job_benefits.id", ondelete="CASCADE"), nullable=False)
    __table_args__ = (
        UniqueConstraint("job_id", "job_benefit_id", name="uq_job_benefit"),
    )


class Skill(Base):
    __tablename__ = "skills"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), nullable=False, unique=True)


class JobSkill(Base):
    __tablename__ = "job_skill"
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)


class Job(Base):
    __tablename__ = "jobs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey("employers.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    job_type = Column(String(100), nullable=True)  # may hold several comma-separated types
    location_type = Column(String(20), nullable=True)  # onsite / hybrid / remote
    city = Column(String(100), nullable=True)
    state_province = Column(String(100), nullable=True)
    country_code = Column(String(5), nullable=True)
    country_name = Column(String(100), nullable=True)
    pay_min = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    pay_max = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    currency = Column(String(3), nullable=True, default="USD")
    vacancies = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="draft")
    posted_at = Column(DateTime(timezone=True), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    __table_args__ = (
        Index("idx_jobs_status_posted", "status", "posted_at"),
    )


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=True)
    role = Column(String(20), nullable=False)  # seeker / employer / admin


class JobSeeker(Base):
    __tablename__ = "job_seekers"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)


class JobApplication(Base):
    __tablename__ = "job_applications"
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_seeker_id = Column(Integer, ForeignKey("job_seekers.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class SavedJob(Base):
    __tablename__ = "saved_jobs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    job_seeker_id = Column(Integer, ForeignKey("job_seekers.id", ondelete="CASCADE"), nullable=False)
    __table_args__ = (
        UniqueConstraint("job_seeker_id", "job_id", name="uq_saved_seeker_job"),
    )
