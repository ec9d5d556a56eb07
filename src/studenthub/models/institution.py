"""Institution model."""

import uuid

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Institution(Base):
    """Organisational scope for users and events."""

    __tablename__ = "institutions"
    __table_args__ = (
        UniqueConstraint("name", name="institutions_name_unique"),
        UniqueConstraint("code", name="institutions_code_unique"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    code = Column(String, nullable=False)
    address = Column(String, nullable=False, default="")
    contact_email = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    members = relationship("User", back_populates="institution")
    events = relationship("Event", back_populates="institution")
