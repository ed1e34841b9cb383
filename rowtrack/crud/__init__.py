# Domain operations over a Repository
from .subjects import subjects_by_category, list_subjects, toggle_subject_active, list_tests
from .grades import latest_grades, average_grade, add_grade, grade_distribution
from .completions import completion_count, record_completion, set_completion_count
from .feedback import add_category_feedback, feedback_history, latest_feedback
from .users import create_user, update_user, delete_user, list_users, list_students
from .grading import save_grading

__all__ = [
    "subjects_by_category",
    "list_subjects",
    "toggle_subject_active",
    "list_tests",
    "latest_grades",
    "average_grade",
    "add_grade",
    "grade_distribution",
    "completion_count",
    "record_completion",
    "set_completion_count",
    "add_category_feedback",
    "feedback_history",
    "latest_feedback",
    "create_user",
    "update_user",
    "delete_user",
    "list_users",
    "list_students",
    "save_grading",
]
