"""Student portfolio model."""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class Portfolio(Base):
    """Summary document over a student's verified achievements."""

    __tablename__ = "portfolios"
    __table_args__ = (
        UniqueConstraint("student_id", name="portfolios_student_unique"),
        CheckConstraint("total_points >= 0", name="portfolios_total_points_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    is_public = Column(Boolean, nullable=False, default=False)
    total_points = Column(Integer, nullable=False, default=0)
    generated_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    student = relationship("User", back_populates="portfolio")
