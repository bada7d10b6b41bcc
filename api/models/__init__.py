# Models module
from .job import Job, JobStatus, OutputFormat, IMMUTABLE_FIELDS

__all__ = ["Job", "JobStatus", "OutputFormat", "IMMUTABLE_FIELDS"]
