"""Read models behind the screens."""

import pytest

from rowtrack.crud.grades import add_grade
from rowtrack.crud.completions import record_completion
from rowtrack.crud.feedback import add_category_feedback
from rowtrack.crud.views import student_dashboard, grading_view, history_view, admin_panel
from rowtrack.exceptions import AppException


def test_dashboard_for_new_student(repo, people):
    view = student_dashboard(repo, people["emma"])
    assert view["student"]["name"] == "Emma de Vries"
    assert view["totals"] == {"grades": 0, "tests_completed": 0}
    assert [c["category"] for c in view["categories"]] == ["verrichtingen", "roeitechniek", "stuurkunst"]
    for category in view["categories"]:
        assert category["feedback"] is None
        assert all(s["average"] == 0 and s["latest_grades"] == [] for s in category["subjects"])
    assert all(t["count"] == 0 for t in view["tests"])


def test_dashboard_window(repo, people, subject_ids):
    for value in (1, 1, 3, 3):
        add_grade(repo, people["jan"], subject_ids["Ritme"], value, people["teacher"])
    view = student_dashboard(repo, people["jan"])
    ritme = next(s for c in view["categories"] for s in c["subjects"] if s["name"] == "Ritme")
    assert len(ritme["latest_grades"]) == 3
    assert view["totals"]["grades"] == 4


def test_grading_view_prefills_latest(repo, people, subject_ids, catalog_tests):
    add_grade(repo, people["jan"], subject_ids["Inpik"], 2, people["teacher"])
    add_category_feedback(repo, people["jan"], "roeitechniek", "oud", people["teacher"])
    add_category_feedback(repo, people["jan"], "roeitechniek", "nieuw", people["teacher"])
    record_completion(repo, people["jan"], catalog_tests[0])

    view = grading_view(repo, people["jan"])
    roeitechniek = next(c for c in view["categories"] if c["category"] == "roeitechniek")
    inpik = next(s for s in roeitechniek["subjects"] if s["name"] == "Inpik")
    assert inpik["latest_grade"] == 2
    assert roeitechniek["feedback"] == "nieuw"
    assert view["tests"][0]["count"] == 1


def test_history_lists_everything(repo, people, subject_ids, catalog_tests):
    for value in (1, 2, 3, 2):
        add_grade(repo, people["jan"], subject_ids["Balans"], value, people["teacher"])
    record_completion(repo, people["jan"], catalog_tests[0])

    view = history_view(repo, people["jan"])
    balans = next(s for c in view["categories"] for s in c["subjects"] if s["name"] == "Balans")
    assert len(balans["grades"]) == 4
    assert view["completions"][0]["test_name"] == "Theorie Basistest"


def test_views_require_a_student(repo, people):
    for build in (student_dashboard, grading_view, history_view):
        with pytest.raises(AppException):
            build(repo, people["admin"])


def test_admin_panel(repo, people):
    panel = admin_panel(repo)
    assert sum(len(c["subjects"]) for c in panel["categories"]) == 33
    assert {u["role"] for u in panel["users"]} == {"student", "teacher", "admin"}
