from app.models.base import Base
from app.models.research_object import ResearchObject

__all__ = [
    "Base",
    "ResearchObject",
]
