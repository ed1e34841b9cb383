"""Tests for grade aggregation and the add-grade rules."""

from datetime import datetime, timedelta, timezone

import pytest

from rowtrack.config import GRADE_AVERAGE_WINDOW
from rowtrack.crud.grades import latest_grades, average_grade, add_grade, grade_distribution
from rowtrack.crud.subjects import toggle_subject_active
from rowtrack.exceptions import AppException, ErrorCode
from rowtrack.models import Grade


class TestEmptyHistory:
    def test_average_is_zero_without_grades(self, repo, people, subject_ids):
        assert average_grade(repo, people["jan"], subject_ids["Bootbehandeling"]) == 0

    def test_latest_is_empty_without_grades(self, repo, people, subject_ids):
        assert latest_grades(repo, people["jan"], subject_ids["Bootbehandeling"], 5) == []


class TestAddGrade:
    @pytest.mark.parametrize("value", [0, 4, -1, 10, True])
    def test_out_of_range_rejected_and_nothing_written(self, repo, people, subject_ids, value):
        with pytest.raises(AppException) as exc:
            add_grade(repo, people["jan"], subject_ids["Inpik"], value, people["teacher"], "")
        assert exc.value.status_code == 400
        assert exc.value.error_code == ErrorCode.VALIDATION_ERROR
        assert repo.list_grades(people["jan"]) == []

    def test_appends_with_current_date(self, repo, people, subject_ids):
        before = datetime.now(timezone.utc)
        grade = add_grade(repo, people["jan"], subject_ids["Inpik"], 2, people["teacher"], " Goed ")
        assert grade.id is not None
        assert grade.grade == 2
        assert grade.feedback == "Goed"
        assert grade.teacher_id == people["teacher"]
        assert grade.date >= before

    def test_never_overwrites(self, repo, people, subject_ids):
        for value in (1, 2):
            add_grade(repo, people["jan"], subject_ids["Inpik"], value, people["teacher"], "")
        assert len(repo.list_grades(people["jan"])) == 2

    def test_inactive_subject_not_gradable(self, repo, people, subject_ids):
        toggle_subject_active(repo, subject_ids["Noodstop"], False)
        with pytest.raises(AppException) as exc:
            add_grade(repo, people["jan"], subject_ids["Noodstop"], 3, people["teacher"], "")
        assert exc.value.error_code == ErrorCode.VALIDATION_ERROR
        assert repo.list_grades(people["jan"]) == []

    def test_unknown_subject(self, repo, people):
        with pytest.raises(AppException) as exc:
            add_grade(repo, people["jan"], 9999, 3, people["teacher"], "")
        assert exc.value.status_code == 404

    def test_only_students_are_graded(self, repo, people, subject_ids):
        with pytest.raises(AppException) as exc:
            add_grade(repo, people["teacher"], subject_ids["Inpik"], 3, people["teacher"], "")
        assert exc.value.status_code == 404


class TestAggregation:
    def _grade(self, repo, student, subject, value, days_ago):
        repo.add_grade(Grade(
            student_id=student,
            subject_id=subject,
            grade=value,
            teacher_id=None,
            date=datetime(2024, 6, 1, tzinfo=timezone.utc) - timedelta(days=days_ago),
        ))

    def test_latest_is_newest_first_and_truncated(self, repo, people, subject_ids):
        subject = subject_ids["Ritme"]
        for value, days_ago in [(1, 30), (3, 1), (2, 10)]:
            self._grade(repo, people["jan"], subject, value, days_ago)

        latest = latest_grades(repo, people["jan"], subject, 2)
        assert [g.grade for g in latest] == [3, 2]
        assert latest_grades(repo, people["jan"], subject, 0) == []

    def test_average_uses_latest_window(self, repo, people, subject_ids):
        subject = subject_ids["Ritme"]
        # oldest first: 1, 1, 3, 3 -> window is 3, 3, 1
        for days_ago, value in [(40, 1), (30, 1), (20, 3), (10, 3)]:
            self._grade(repo, people["jan"], subject, value, days_ago)

        assert GRADE_AVERAGE_WINDOW == 3
        assert average_grade(repo, people["jan"], subject) == pytest.approx(7 / 3)

    def test_other_students_do_not_leak(self, repo, people, subject_ids):
        subject = subject_ids["Ritme"]
        self._grade(repo, people["emma"], subject, 1, 1)
        self._grade(repo, people["jan"], subject, 3, 2)
        assert average_grade(repo, people["jan"], subject) == 3

    def test_distribution(self, repo, people, subject_ids):
        for value in (1, 3, 3):
            add_grade(repo, people["jan"], subject_ids["Balans"], value, people["teacher"], "")
        assert grade_distribution(repo.list_grades(people["jan"])) == {1: 1, 2: 0, 3: 2}


def test_jan_scenario(repo, people, subject_ids):
    bootbehandeling = subject_ids["Bootbehandeling"]
    grade = add_grade(repo, people["jan"], bootbehandeling, 3, people["teacher"], "Goed")

    latest = latest_grades(repo, people["jan"], bootbehandeling, 1)
    assert len(latest) == 1
    assert latest[0].id == grade.id
    assert latest[0].feedback == "Goed"
    assert average_grade(repo, people["jan"], bootbehandeling) == 3


def test_grade_date_round_trips_as_utc(repo, people, subject_ids):
    stamp = datetime(2024, 5, 15, 14, 30, tzinfo=timezone.utc)
    add_grade(repo, people["jan"], subject_ids["Inpik"], 2, people["teacher"], date=stamp)

    stored = latest_grades(repo, people["jan"], subject_ids["Inpik"], 1)[0]
    assert stored.date == stamp
    assert stored.date.tzinfo is not None
