from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from launchpad.models.base import Base, TimestampMixin


class StoredDocument(Base, TimestampMixin):
    __tablename__ = "documents"

    # Collection name ("events", "signups") + store-generated id
    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
