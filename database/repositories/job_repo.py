"""Job repository backed by the MongoDB jobs collection."""
from enum import Enum
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from api.models.job import Job, JobStatus, OutputFormat
from database.repositories.base import check_update_fields
from shared.utils import generate_job_id, get_utc_now


class MongoJobStore:
    """Repository for Job CRUD operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.jobs

    async def create(self, url: str, output_format: OutputFormat) -> Job:
        """Create a new job record."""
        job = Job(
            id=generate_job_id(),
            url=url,
            format=output_format,
            status=JobStatus.PENDING,
            progress=0,
            created_at=get_utc_now()
        )
        await self.collection.insert_one(self._to_document(job))
        return job

    async def get(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        document = await self.collection.find_one({"_id": job_id})
        return self._to_job(document)

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[Job]:
        """Apply a partial update and return the updated job."""
        check_update_fields(fields)
        document = await self.collection.find_one_and_update(
            {"_id": job_id},
            {"$set": self._serialize(fields)},
            return_document=ReturnDocument.AFTER
        )
        return self._to_job(document)

    async def list_recent_completed(self, limit: int = 10) -> List[Job]:
        """List completed jobs, newest first."""
        if limit <= 0:
            return []
        cursor = self.collection.find(
            {"status": JobStatus.COMPLETED.value}
        ).sort("created_at", -1).limit(limit)
        documents = await cursor.to_list(length=limit)
        return [self._to_job(document) for document in documents]

    async def delete(self, job_id: str) -> bool:
        """Delete a job by ID."""
        result = await self.collection.delete_one({"_id": job_id})
        return result.deleted_count > 0

    def _to_document(self, job: Job) -> Dict[str, Any]:
        document = self._serialize(job.model_dump())
        document["_id"] = document.pop("id")
        return document

    @staticmethod
    def _serialize(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: value.value if isinstance(value, Enum) else value
            for key, value in fields.items()
        }

    @staticmethod
    def _to_job(document: Optional[Dict[str, Any]]) -> Optional[Job]:
        if not document:
            return None
        document = dict(document)
        document["id"] = document.pop("_id")
        return Job.model_validate(document)
