"""Achievement model subject to faculty verification."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base, enum_values
from ..utils.datetime import utcnow
from .user import VerificationStatus


class AchievementCategory(str, enum.Enum):
    """Kinds of accomplishment a student can log."""

    ACADEMIC = "academic"
    EXTRACURRICULAR = "extracurricular"
    SPORTS = "sports"
    RESEARCH = "research"
    VOLUNTEER = "volunteer"
    CERTIFICATION = "certification"


class Achievement(Base):
    """Student accomplishment awaiting or carrying a verification decision."""

    __tablename__ = "achievements"
    __table_args__ = (
        CheckConstraint("points >= 0", name="achievements_points_non_negative"),
        CheckConstraint(
            "(verification_status = 'pending' AND verified_by IS NULL) "
            "OR (verification_status <> 'pending' AND verified_by IS NOT NULL)",
            name="achievements_verifier_matches_status",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(
        SAEnum(AchievementCategory, name="achievement_category", values_callable=enum_values),
        nullable=False,
    )
    date_achieved = Column(Date, nullable=False)
    verification_status = Column(
        SAEnum(VerificationStatus, name="achievement_verification_status", values_callable=enum_values),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    verified_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"))
    points = Column(Integer, nullable=False, default=0)
    evidence_url = Column(String)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    student = relationship("User", foreign_keys=[student_id], back_populates="achievements")
    verifier = relationship("User", foreign_keys=[verified_by])
