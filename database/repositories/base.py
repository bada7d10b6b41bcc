"""Job store interface consumed by the pipeline and the API layer."""
from typing import Any, Dict, List, Optional, Protocol

from api.models.job import Job, OutputFormat, IMMUTABLE_FIELDS


class JobStore(Protocol):
    """Keyed repository of job records.

    ``update`` must be atomic per job id: progress updates arrive as a rapid
    sequence of partial writes to the same key and none may be lost.
    """

    async def create(self, url: str, output_format: OutputFormat) -> Job: ...

    async def get(self, job_id: str) -> Optional[Job]: ...

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[Job]: ...

    async def list_recent_completed(self, limit: int = 10) -> List[Job]: ...

    async def delete(self, job_id: str) -> bool: ...


def check_update_fields(fields: Dict[str, Any]) -> None:
    """Reject partial updates that name unknown or immutable fields."""
    unknown = set(fields) - set(Job.model_fields)
    if unknown:
        raise ValueError(f"Unknown job fields: {', '.join(sorted(unknown))}")
    frozen = set(fields) & IMMUTABLE_FIELDS
    if frozen:
        raise ValueError(f"Immutable job fields: {', '.join(sorted(frozen))}")
