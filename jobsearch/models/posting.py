from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CompanyInfo(BaseModel):
    name: str
    location: Optional[str] = None
    website: Optional[str] = None


class PostingDTO(BaseModel):
    id: int
    title: str
    company: CompanyInfo
    vacancies: Optional[int] = None
    job_type: str
    salary_range: Optional[str] = None
    tags: list[str] = []
    is_featured: bool = False
    is_new: bool = False
    posted_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    description: str = ""
    overview: str = ""
    requirements: list[str] = []
    responsibilities: list[str] = []
    benefits: list[str] = []
    application_link: Optional[str] = None
    has_applied: bool = False
    is_saved: bool = False


class BenefitItem(BaseModel):
    id: int
    name: str


class CategoryItem(BaseModel):
    id: int
    name: str


class EmployerItem(BaseModel):
    id: int
    company_name: str


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_jobs: int


class SearchPage(BaseModel):
    data: list[PostingDTO]
    benefits: list[BenefitItem]
    categories: list[CategoryItem]
    employers: list[EmployerItem]
    pagination: Pagination


class HeroStats(BaseModel):
    total_jobs: int
    total_seekers: int
    total_employers: int
    companies_hiring: int
