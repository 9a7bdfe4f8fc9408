class JobSearchError(Exception):
    """Base class for errors surfaced by the search pipeline."""


class JobNotFound(JobSearchError):
    def __init__(self, job_id: int):
        super().__init__(f"job {job_id} not found")
        self.job_id = job_id
