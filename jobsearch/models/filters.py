from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from jobsearch.log import get_logger
from jobsearch.settings import settings

log = get_logger(__name__)


class ViewerIdentity(BaseModel):
    """Authenticated viewer; ``seeker_id`` is filled when the session already knows it."""
    user_id: int
    seeker_id: Optional[int] = None


class FilterCriteria(BaseModel):
    search: Optional[str] = None
    job_type: Optional[str] = None
    benefit_id: Optional[int] = None
    category_id: Optional[int] = None
    employer_id: Optional[int] = None
    countries: list[str] = Field(default_factory=list)
    salary: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    date_posted: Optional[str] = None
    experience_level: Optional[str] = None
    sort: Literal["newest", "oldest"] = "newest"
    per_page: int = Field(default=settings.DEFAULT_PER_PAGE, ge=1)
    page: int = Field(default=1, ge=1)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterCriteria":
        """
        Build criteria from raw query parameters (values are str, int, lists
        of str or None). Bad values drop their own dimension and never raise.
        """
        countries = []
        country = _text(params.get("country"))
        if country:
            countries.append(country)
        countries.extend(_text_list(params.get("countries")))

        per_page = _int(params.get("per_page"), "per_page")
        page = _int(params.get("page"), "page")
        sort = _text(params.get("sort"))

        return cls(
            search=_text(params.get("search")),
            job_type=_text(params.get("jobtypes")),
            benefit_id=_positive_id(params.get("benefits"), "benefits"),
            category_id=_positive_id(params.get("category"), "category"),
            employer_id=_positive_id(params.get("company"), "company"),
            countries=countries,
            salary=_text(params.get("salary")),
            skills=_text_list(params.get("skills")),
            date_posted=_text(params.get("dateposted")),
            experience_level=_text(params.get("experiencelevel")),
            sort="oldest" if sort == "oldest" else "newest",
            per_page=settings.DEFAULT_PER_PAGE if per_page is None else max(1, per_page),
            page=1 if page is None else max(1, page),
        )


# ---------------------------
# Raw parameter coercion
# ---------------------------

def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _text(value: Any) -> Optional[str]:
    value = _first(value)
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _text_list(value: Any) -> list[str]:
    """Accept "a, b,c" or ["a", "b"]; blanks are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value if v is not None]
    else:
        items = [str(value)]
    return [i.strip() for i in items if i.strip()]


def _int(value: Any, name: str) -> Optional[int]:
    value = _first(value)
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        log.debug("ignoring non-numeric %s=%r", name, value)
        return None


def _positive_id(value: Any, name: str) -> Optional[int]:
    n = _int(value, name)
    return n if n is not None and n > 0 else None


_TRUE = {"1", "true", "on", "yes"}


def parse_flag(value: Any, default: bool = True) -> bool:
    """Boolean-like query value ("1", "true", "off", ...); unknown text is False."""
    value = _first(value)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE
