"""
Read models for the four screens: student dashboard, teacher grading,
teacher history and the admin panel.

History is fetched once per student and grouped in memory, so a view
costs a fixed number of store calls regardless of how many subjects
the catalog has.
"""
from collections import defaultdict
from typing import Dict, List, Optional
from ..config import GRADE_AVERAGE_WINDOW
from ..models import Category, Grade, CategoryFeedback
from ..repository import Repository
from .grades import grade_distribution, window_average
from .completions import completion_counts
from .users import get_student, display_names

UNKNOWN_TEACHER = "Unknown"


def _by_subject(grades: List[Grade]) -> Dict[int, List[Grade]]:
    grouped = defaultdict(list)
    for g in grades:  # already newest first
        grouped[g.subject_id].append(g)
    return grouped


def _grade_entry(grade: Grade, names: dict) -> dict:
    return {
        "id": grade.id,
        "grade": grade.grade,
        "date": grade.date,
        "feedback": grade.feedback,
        "teacher_id": grade.teacher_id,
        "teacher_name": names.get(grade.teacher_id, UNKNOWN_TEACHER),
    }


def _feedback_entry(feedback: Optional[CategoryFeedback], names: dict) -> Optional[dict]:
    if feedback is None:
        return None
    return {
        "id": feedback.id,
        "feedback": feedback.feedback,
        "date": feedback.date,
        "teacher_id": feedback.teacher_id,
        "teacher_name": names.get(feedback.teacher_id, UNKNOWN_TEACHER),
    }


def _student_entry(student) -> dict:
    return {"id": student.id, "username": student.username, "name": student.name, "groep": student.groep}


def _tests_with_counts(repo: Repository, student_id: int) -> List[dict]:
    counts = completion_counts(repo, student_id)
    return [
        {"id": t.id, "name": t.name, "description": t.description, "count": counts.get(t.id, 0)}
        for t in repo.list_tests()
    ]


def student_dashboard(repo: Repository, student_id: int) -> dict:
    student = get_student(repo, student_id)
    names = display_names(repo)
    grades = repo.list_grades(student_id)
    grouped = _by_subject(grades)
    feedback = repo.list_category_feedback(student_id)
    tests = _tests_with_counts(repo, student_id)

    categories = []
    for category in Category:
        latest = next((f for f in feedback if f.category == category.value), None)
        subjects = []
        # Inactive subjects stay visible here, read-only
        for subject in repo.list_subjects(category=category.value):
            rows = grouped.get(subject.id, [])
            subjects.append({
                "id": subject.id,
                "name": subject.name,
                "active": subject.active,
                "average": window_average(rows),
                "latest_grades": [_grade_entry(g, names) for g in rows[:GRADE_AVERAGE_WINDOW]],
            })
        categories.append({
            "category": category.value,
            "feedback": _feedback_entry(latest, names),
            "subjects": subjects,
        })

    return {
        "student": _student_entry(student),
        "totals": {
            "grades": len(grades),
            "tests_completed": sum(t["count"] for t in tests),
        },
        "grade_distribution": grade_distribution(grades),
        "categories": categories,
        "tests": tests,
    }


def grading_view(repo: Repository, student_id: int) -> dict:
    student = get_student(repo, student_id)
    grouped = _by_subject(repo.list_grades(student_id))
    feedback = repo.list_category_feedback(student_id)

    categories = []
    for category in Category:
        latest = next((f for f in feedback if f.category == category.value), None)
        subjects = []
        for subject in repo.list_subjects(category=category.value, active=True):
            rows = grouped.get(subject.id, [])
            subjects.append({
                "id": subject.id,
                "name": subject.name,
                "latest_grade": rows[0].grade if rows else None,
                "latest_date": rows[0].date if rows else None,
                "average": window_average(rows),
            })
        categories.append({
            "category": category.value,
            "feedback": latest.feedback if latest else "",
            "subjects": subjects,
        })

    return {
        "student": _student_entry(student),
        "categories": categories,
        "tests": _tests_with_counts(repo, student_id),
    }


def history_view(repo: Repository, student_id: int) -> dict:
    student = get_student(repo, student_id)
    names = display_names(repo)
    grouped = _by_subject(repo.list_grades(student_id))
    feedback = repo.list_category_feedback(student_id)
    test_names = {t.id: t.name for t in repo.list_tests()}

    categories = []
    for category in Category:
        subjects = []
        for subject in repo.list_subjects(category=category.value):
            subjects.append({
                "id": subject.id,
                "name": subject.name,
                "active": subject.active,
                "grades": [_grade_entry(g, names) for g in grouped.get(subject.id, [])],
            })
        categories.append({
            "category": category.value,
            "subjects": subjects,
            "feedback": [_feedback_entry(f, names) for f in feedback if f.category == category.value],
        })

    completions = [
        {
            "id": c.id,
            "test_id": c.test_id,
            "test_name": test_names.get(c.test_id, "Unknown test"),
            "completed": c.completed,
            "date": c.date,
        }
        for c in repo.list_completions(student_id)
    ]

    return {
        "student": _student_entry(student),
        "categories": categories,
        "completions": completions,
    }


def admin_panel(repo: Repository) -> dict:
    return {
        "categories": [
            {
                "category": category.value,
                "subjects": [
                    {"id": s.id, "name": s.name, "active": s.active}
                    for s in repo.list_subjects(category=category.value)
                ],
            }
            for category in Category
        ],
        "users": [
            {"id": u.id, "username": u.username, "name": u.name, "role": u.role, "groep": u.groep}
            for u in repo.list_users()
        ],
    }
