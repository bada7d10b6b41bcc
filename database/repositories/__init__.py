# Repositories module
from .base import JobStore
from .memory_repo import InMemoryJobStore
from .job_repo import MongoJobStore

__all__ = ["JobStore", "InMemoryJobStore", "MongoJobStore"]
