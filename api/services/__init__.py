# Services module
from .artifacts import ArtifactStorage
from .documents import DocumentService

__all__ = ["ArtifactStorage", "DocumentService"]
