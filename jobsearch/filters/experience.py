# jobsearch/filters/experience.py
from typing import Optional

_YEARS = r"(?:years?|yrs?)"

# ---------------------------------------------
# Experience buckets -> phrasings in free text
# ---------------------------------------------
# Matched against the lower-cased description. These are rough on purpose:
# "3 years" also satisfies "2+", and "one year" satisfies "0-1".
EXPERIENCE_BUCKETS: dict[str, list[str]] = {
    "0-1": [
        r"\b0-1\s*years?\b",
        rf"\b(?:0|zero|1|one)\s*(?:\+?\s*)?{_YEARS}\b",
        r"\bno\s+experience\b",
        r"\bentry[-\s]?level\b",
        r"\bfresh(?:er)?\b",
    ],
    "2+": [
        rf"\b(?:(?:[2-9]|[1-9][0-9]+))\s*\+?\s*{_YEARS}\b",
        rf"\b(?:two|three|four|five|six|seven|eight|nine|ten)\s*\+?\s*{_YEARS}\b",
        rf"\b(?:at\s+least|min(?:imum)?)\s*(?:2|two)\s*{_YEARS}\b",
    ],
    "3+": [
        rf"\b(?:(?:[3-9]|[1-9][0-9]+))\s*\+?\s*{_YEARS}\b",
        rf"\b(?:three|four|five|six|seven|eight|nine|ten)\s*\+?\s*{_YEARS}\b",
        rf"\b(?:at\s+least|min(?:imum)?)\s*(?:3|three)\s*{_YEARS}\b",
    ],
    "5+": [
        rf"\b(?:(?:[5-9]|[1-9][0-9]+))\s*\+?\s*{_YEARS}\b",
        rf"\b(?:five|six|seven|eight|nine|ten)\s*\+?\s*{_YEARS}\b",
        rf"\b(?:at\s+least|min(?:imum)?)\s*(?:5|five)\s*{_YEARS}\b",
    ],
    "10+": [
        rf"\b(?:(?:1[0-9]|[2-9][0-9]+))\s*\+?\s*{_YEARS}\b",
        rf"\b(?:ten|eleven|twelve)\s*\+?\s*{_YEARS}\b",
        rf"\b(?:at\s+least|min(?:imum)?)\s*(?:10|ten)\s*{_YEARS}\b",
    ],
}


def build_experience_pattern(label: Optional[str]) -> Optional[str]:
    """
    Map an experience label ("2+ years", "0-1 year", ...) to a regex alternation
    over the bucket's phrasings. Buckets are picked by label prefix; unknown
    labels return None and the experience filter is skipped.
    """
    if not label:
        return None
    normalized = label.strip().lower()
    for prefix, patterns in EXPERIENCE_BUCKETS.items():
        if normalized.startswith(prefix):
            return "|".join(patterns)
    return None
