from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from school_portal.core.enums import LeaveStatus, Role
from school_portal.core.exceptions import ValidationError
from school_portal.leaves.model import NewLeaveApplication
from school_portal.leaves.service import LeaveService

from factories import make_student


def _new(student_id="stu-1", start=date(2024, 1, 10), end=date(2024, 1, 12), reason="Medical"):
    return NewLeaveApplication(
        student_id=student_id,
        student_name="Sam",
        student_roll_number="S123",
        start_date=start,
        end_date=end,
        reason=reason,
    )


@pytest.fixture
def svc(store):
    store.put_student(make_student(id="stu-1"))
    return LeaveService(store)


def test_apply_creates_pending_application(svc, store):
    now = datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc)

    app = svc.apply_for_leave(_new(), now=now)

    assert app.status == LeaveStatus.PENDING
    assert app.application_date == now
    assert store.leave_applications == (app,)


def test_apply_rejects_inverted_range(svc):
    with pytest.raises(ValidationError):
        svc.apply_for_leave(_new(start=date(2024, 1, 12), end=date(2024, 1, 10)))


def test_apply_requires_reason(svc):
    with pytest.raises(ValidationError):
        svc.apply_for_leave(_new(reason="   "))


def test_approval_marks_leave_days_present(svc, store):
    app = svc.apply_for_leave(_new())

    assert svc.update_leave_status(app.id, LeaveStatus.APPROVED, "Get well") is True

    student = store.get_student("stu-1")
    leave_days = [r for r in student.attendance if r.subject == "On Approved Leave"]
    assert len(leave_days) == 3
    assert store.get_leave_application(app.id).teacher_comment == "Get well"


def test_reapproval_adds_no_duplicates(svc, store):
    app = svc.apply_for_leave(_new())
    svc.update_leave_status(app.id, LeaveStatus.APPROVED)
    before = store.get_student("stu-1").attendance

    svc.update_leave_status(app.id, LeaveStatus.APPROVED)

    assert store.get_student("stu-1").attendance == before


def test_leave_records_use_first_teacher_name(svc, store):
    teacher = store.find_first_user_with_role(Role.TEACHER)
    app = svc.apply_for_leave(_new())

    svc.update_leave_status(app.id, LeaveStatus.APPROVED)

    names = {r.teacher_name for r in store.get_student("stu-1").attendance if r.subject == "On Approved Leave"}
    assert names == {teacher.name}


def test_leave_records_fall_back_to_system_without_teachers(svc, store):
    store.replace_users([u for u in store.users if u.role != Role.TEACHER])
    app = svc.apply_for_leave(_new())

    svc.update_leave_status(app.id, LeaveStatus.APPROVED)

    names = {r.teacher_name for r in store.get_student("stu-1").attendance if r.subject == "On Approved Leave"}
    assert names == {"System"}


def test_rejection_leaves_attendance_untouched(svc, store):
    app = svc.apply_for_leave(_new())
    before = store.get_student("stu-1").attendance

    svc.update_leave_status(app.id, LeaveStatus.REJECTED, "No")

    assert store.get_student("stu-1").attendance == before
    assert store.get_leave_application(app.id).status == LeaveStatus.REJECTED


def test_unknown_application_is_ignored(svc, store):
    assert svc.update_leave_status("leave-missing", LeaveStatus.APPROVED) is False
    assert store.leave_applications == ()


def test_unknown_student_still_records_decision(svc, store):
    app = svc.apply_for_leave(_new(student_id="ghost"))

    assert svc.update_leave_status(app.id, LeaveStatus.APPROVED) is True
    assert store.get_leave_application(app.id).status == LeaveStatus.APPROVED


def test_leave_ending_on_the_last_calendar_day(svc, store):
    app = svc.apply_for_leave(_new(start=date(9999, 12, 30), end=date(9999, 12, 31)))

    assert svc.update_leave_status(app.id, LeaveStatus.APPROVED) is True

    dates = [r.date for r in store.get_student("stu-1").attendance if r.subject == "On Approved Leave"]
    assert dates == ["9999-12-30", "9999-12-31"]
    assert store.get_leave_application(app.id).status == LeaveStatus.APPROVED


def test_failed_synthesis_leaves_decision_unsaved(svc, store, monkeypatch):
    app = svc.apply_for_leave(_new())

    def explode(*args, **kwargs):
        raise OverflowError("date value out of range")

    monkeypatch.setattr("school_portal.leaves.service.synthesize_leave_attendance", explode)

    with pytest.raises(OverflowError):
        svc.update_leave_status(app.id, LeaveStatus.APPROVED)
    assert store.get_leave_application(app.id).status == LeaveStatus.PENDING


def test_listing_helpers(svc):
    mine = svc.apply_for_leave(_new())
    other = svc.apply_for_leave(_new(student_id="stu-2"))
    svc.update_leave_status(other.id, LeaveStatus.REJECTED)

    assert svc.list_for_student("stu-1") == [mine]
    assert svc.list_pending() == [mine]
