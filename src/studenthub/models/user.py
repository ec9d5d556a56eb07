"""User domain model."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum as SAEnum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from ..core.database import Base, enum_values
from ..utils.datetime import utcnow


class UserRole(str, enum.Enum):
    """Roles a hub account can hold."""

    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class VerificationStatus(str, enum.Enum):
    """Review state shared by accounts and achievements."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class User(Base):
    """Represents a student, faculty member or administrator."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="users_email_unique"),
        CheckConstraint("role <> 'student' OR student_id IS NOT NULL", name="users_student_number_required"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    # Stored as text so a malformed value still loads and falls back to the student view.
    role = Column(String(16), nullable=False)
    institution_id = Column(Uuid(as_uuid=True), ForeignKey("institutions.id", ondelete="RESTRICT"))
    student_id = Column(String)
    department = Column(String)
    verification_status = Column(
        SAEnum(VerificationStatus, name="user_verification_status", values_callable=enum_values),
        nullable=False,
        default=VerificationStatus.PENDING,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    institution = relationship("Institution", back_populates="members")
    achievements = relationship(
        "Achievement",
        foreign_keys="Achievement.student_id",
        back_populates="student",
    )
    events_created = relationship("Event", back_populates="creator")
    participations = relationship(
        "EventParticipation",
        foreign_keys="EventParticipation.student_id",
        back_populates="student",
    )
    portfolio = relationship("Portfolio", back_populates="student", uselist=False)
    credential = relationship("AuthCredential", back_populates="user", uselist=False)
