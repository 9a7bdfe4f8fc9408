# jobsearch/filters/salary.py
import re
from typing import NamedTuple, Optional


class SalaryRange(NamedTuple):
    """Requested bounds in whole dollars; ``None`` means open on that side."""
    min: Optional[int]
    max: Optional[int]


# Checked in order, first match wins
_RANGE_RE = re.compile(r"^(\d+)\s*k\s*-\s*(\d+)\s*k$")
_FLOOR_RE = re.compile(r"^(\d+)\s*k\s*\+$")
_CEILING_RE = re.compile(r"^(?:up to|<=?|≤)\s*(\d+)\s*k$")
_EXACT_RE = re.compile(r"^(\d+)\s*k$")


def _normalize(label: str) -> str:
    s = label.lower().replace("$", "").replace(",", "")
    return re.sub(r"\s+", " ", s.strip())


def parse_salary_range(label: str) -> Optional[SalaryRange]:
    """
    Parse the compact salary labels the job board sends, e.g.
    "$50k - $80k", "$180k+", "up to $80k", "<= 80k", "$65k".
    Returns None for anything else so the salary filter is skipped.
    """
    if not label or not isinstance(label, str):
        return None
    s = _normalize(label)

    m = _RANGE_RE.match(s)
    if m:
        return SalaryRange(int(m.group(1)) * 1000, int(m.group(2)) * 1000)
    m = _FLOOR_RE.match(s)
    if m:
        return SalaryRange(int(m.group(1)) * 1000, None)
    m = _CEILING_RE.match(s)
    if m:
        return SalaryRange(None, int(m.group(1)) * 1000)
    m = _EXACT_RE.match(s)
    if m:
        v = int(m.group(1)) * 1000
        return SalaryRange(v, v)
    return None
