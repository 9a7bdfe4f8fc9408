# scripts/search_once.py
import argparse
import json
import sys

from jobsearch.errors import JobNotFound
from jobsearch.models.filters import FilterCriteria, ViewerIdentity, parse_flag
from jobsearch.pipeline.service import SearchService
from jobsearch.pipeline.storage import get_session, init_engine, session_factory
from jobsearch.settings import settings

# CLI flag -> query parameter name the search endpoint uses
_PARAMS = {
    "search": "search",
    "job_type": "jobtypes",
    "benefit": "benefits",
    "category": "category",
    "country": "country",
    "countries": "countries",
    "salary": "salary",
    "skills": "skills",
    "date_posted": "dateposted",
    "experience": "experiencelevel",
    "company": "company",
    "sort": "sort",
    "page": "page",
    "per_page": "per_page",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run one job search against DB_URL and print the JSON payload")
    for flag in _PARAMS:
        parser.add_argument(f"--{flag.replace('_', '-')}", dest=flag, type=str, default=None)
    parser.add_argument("--user-id", type=int, default=None, help="Viewer user id for applied/saved flags")
    parser.add_argument("--job-id", type=int, default=None, help="Show a single job instead of searching")
    parser.add_argument("--stats", action="store_true", help="Print hero stats instead of searching")
    parser.add_argument("--published", type=str, default="1", help="Stats over published jobs only (default 1)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    init_engine(settings.DB_URL)
    viewer = ViewerIdentity(user_id=args.user_id) if args.user_id else None

    with get_session() as s:
        service = SearchService(s, session_factory=session_factory())
        if args.stats:
            payload = service.hero_stats(parse_flag(args.published)).model_dump(mode="json")
        elif args.job_id is not None:
            try:
                payload = service.get_job(args.job_id, viewer).model_dump(mode="json")
            except JobNotFound as e:
                print(f"[error] {e}", file=sys.stderr)
                return 1
        else:
            params = {name: getattr(args, flag) for flag, name in _PARAMS.items()}
            page = service.search(FilterCriteria.from_params(params), viewer)
            payload = page.model_dump(mode="json")

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
