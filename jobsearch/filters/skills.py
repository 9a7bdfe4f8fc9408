# jobsearch/filters/skills.py
import re
import unicodedata


def slugify(value: str) -> str:
    """"Node.js" -> "nodejs", "Machine Learning" -> "machine-learning"."""
    s = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    s = s.lower().replace("_", "-").replace("@", "-at-")
    s = re.sub(r"[^a-z0-9\s-]+", "", s)
    s = re.sub(r"[\s-]+", "-", s)
    return s.strip("-")


def skill_slugs(names: list[str]) -> list[str]:
    return [s for s in (slugify(n) for n in names) if s]
