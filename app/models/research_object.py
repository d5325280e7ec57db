"""Published research objects, stored as whole JSONB documents."""

import uuid
from sqlalchemy import DateTime, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class ResearchObject(Base):
    """One research object document as written by the publication service.

    The document keeps its stored shape (``Status``, ``Repository``,
    ``Aggregation``); search reads it through JSONB operators and never
    selects ``id``.
    """

    __tablename__ = "research_objects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    document: Mapped[dict] = mapped_column(JSONB, nullable=False)

    ingested_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
