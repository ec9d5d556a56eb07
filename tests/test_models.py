from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from studenthub.models import Achievement, AchievementCategory, VerificationStatus


def _achievement(student, **overrides):
    fields = {
        "student_id": student.id,
        "title": "Dean's list",
        "category": AchievementCategory.ACADEMIC,
        "date_achieved": date(2024, 5, 1),
    }
    fields.update(overrides)
    return Achievement(**fields)


def _rejects(db, achievement):
    db.add(achievement)
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()


def test_pending_achievement_cannot_carry_verifier(db, student, faculty):
    _rejects(db, _achievement(student, verification_status=VerificationStatus.PENDING, verified_by=faculty.id))


def test_decided_achievement_needs_verifier(db, student):
    _rejects(db, _achievement(student, verification_status=VerificationStatus.VERIFIED, verified_by=None))


def test_points_cannot_be_negative(db, student):
    _rejects(db, _achievement(student, points=-5))


def test_pending_achievement_is_accepted(db, student):
    db.add(_achievement(student))
    db.flush()

    stored = db.query(Achievement).one()
    assert stored.verification_status is VerificationStatus.PENDING
    assert stored.verified_by is None
    assert stored.points == 0
    db.rollback()
