"""
Initial data: the subject and test catalog, a bootstrap admin and,
optionally, a small demo cohort with some history.
"""
from datetime import datetime, timezone
import logging
from . import config
from .models import User, Subject, Test, Grade, TestCompletion, CategoryFeedback, Role, Category, Group
from .repository import Repository
from .utils.security import hash_password

logger = logging.getLogger(__name__)

SUBJECTS = {
    Category.verrichtingen: [
        "Bootbehandeling", "Riemenbehandeling", "In- en uitstappen", "Wegvaren", "Aanleggen",
        "Strijken", "Ronden", "Halend aanleggen", "Houden", "Manoeuvres waterzijde", "Noodstop",
        "Slippen", "Wisselen in de boot", "Bootvervoer",
    ],
    Category.roeitechniek: [
        "Inpik", "Doorhaal", "Uitpik", "Recover", "Balans", "Ritme", "Kracht", "Ademhaling",
        "Gelijk roeien", "Houding", "Techniekkennis",
    ],
    Category.stuurkunst: [
        "Koersvastheid", "Commando's", "Startprocedure", "Brugpassage", "Vaarregels",
        "Omgaan met omstandigheden", "Botenhuis kennis", "Veiligheid",
    ],
}

TESTS = [
    ("Theorie Basistest", "Basiskennis over roeitechniek en -termen"),
    ("Praktijk Basistest", "Basistechnieken in praktijk"),
    ("Theorie Scullen", "Theoretische kennis over scullen"),
    ("Praktijk Scullen", "Praktische vaardigheden scullen"),
    ("Theorie Boordroeien", "Theoretische kennis over boordroeien"),
    ("Praktijk Boordroeien", "Praktische vaardigheden boordroeien"),
    ("Theorie Sturen", "Theoretische kennis over sturen"),
    ("Praktijk Sturen", "Praktische vaardigheden sturen"),
    ("Theorie Gevorderd", "Gevorderde theoretische kennis"),
    ("Praktijk Gevorderd", "Gevorderde praktische vaardigheden"),
]

# username, password, name, role, groep
DEMO_USERS = [
    ("student1", "password1", "Jan Jansen", Role.student, Group.diza),
    ("student2", "password2", "Emma de Vries", Role.student, Group.none),
    ("teacher1", "password3", "Prof. Bakker", Role.teacher, None),
    ("teacher2", "password4", "Dr. Visser", Role.teacher, None),
]


def seed_catalog(repo: Repository) -> None:
    if not repo.list_subjects():
        for category, names in SUBJECTS.items():
            for name in names:
                repo.add_subject(Subject(name=name, category=category.value, active=True))
        logger.info("Subject catalog seeded")
    if not repo.list_tests():
        for name, description in TESTS:
            repo.add_test(Test(name=name, description=description))
        logger.info("Test catalog seeded")


def ensure_admin(repo: Repository, username: str = None, password: str = None, name: str = None) -> None:
    if repo.list_users(role=Role.admin.value):
        return
    username = username or config.ADMIN_USERNAME
    if repo.get_user_by_username(username):
        logger.warning(f"No admin account exists and username '{username}' is taken; skipping bootstrap admin")
        return
    repo.add_user(User(
        username=username,
        hashed_password=hash_password(password or config.ADMIN_PASSWORD),
        name=name or config.ADMIN_NAME,
        role=Role.admin.value,
    ))
    logger.info(f"Bootstrap admin '{username}' created")


def seed_demo_data(repo: Repository) -> None:
    if repo.list_users(role=Role.student.value):
        return

    ids = {}
    for username, password, name, role, groep in DEMO_USERS:
        user = repo.add_user(User(
            username=username,
            hashed_password=hash_password(password),
            name=name,
            role=role.value,
            groep=groep.value if groep else None,
        ))
        ids[username] = user.id

    subjects = {s.name: s.id for s in repo.list_subjects()}
    tests = [t.id for t in repo.list_tests()]
    jan, emma = ids["student1"], ids["student2"]
    bakker, visser = ids["teacher1"], ids["teacher2"]

    for student, subject, value, day, teacher, text in [
        (jan, "Bootbehandeling", 2, "2023-05-15", bakker, "Goede voortgang, let nog op houding."),
        (jan, "Bootbehandeling", 3, "2023-06-20", bakker, "Uitstekende verbetering!"),
        (jan, "Riemenbehandeling", 2, "2023-05-15", bakker, "Techniek is verbeterd."),
        (jan, "In- en uitstappen", 1, "2023-05-10", visser, "Meer oefening nodig."),
        (jan, "In- en uitstappen", 2, "2023-06-15", visser, "Flinke verbetering gezien."),
        (jan, "Inpik", 3, "2023-05-22", bakker, "Perfecte techniek!"),
        (emma, "Bootbehandeling", 3, "2023-05-15", bakker, "Uitstekend werk!"),
        (emma, "Inpik", 1, "2023-05-22", bakker, "Meer aandacht nodig voor techniek."),
        (emma, "Inpik", 2, "2023-06-10", bakker, "Betere techniek, blijf oefenen."),
        (emma, "Koersvastheid", 2, "2023-06-05", visser, "Goede stuurvaardigheden."),
    ]:
        repo.add_grade(Grade(
            student_id=student,
            subject_id=subjects[subject],
            grade=value,
            teacher_id=teacher,
            feedback=text,
            date=datetime.fromisoformat(day).replace(tzinfo=timezone.utc),
        ))

    for student, category, text, day, teacher in [
        (jan, Category.verrichtingen, "Good progress in handling equipment. Work on consistent technique.", "2023-06-20", bakker),
        (jan, Category.roeitechniek, "Excellent rowing technique. Continue practicing recovery timing.", "2023-05-22", bakker),
        (emma, Category.stuurkunst, "Steering skills are acceptable. Work on emergency procedures.", "2023-06-05", visser),
    ]:
        repo.add_category_feedback(CategoryFeedback(
            student_id=student,
            category=category.value,
            feedback=text,
            teacher_id=teacher,
            date=datetime.fromisoformat(day).replace(tzinfo=timezone.utc),
        ))

    for student, test_index, day in [
        (jan, 0, "2023-04-10"), (jan, 0, "2023-05-15"), (jan, 1, "2023-04-15"),
        (emma, 0, "2023-04-12"), (emma, 1, "2023-04-18"), (emma, 1, "2023-05-20"),
    ]:
        repo.add_completion(TestCompletion(
            student_id=student,
            test_id=tests[test_index],
            completed=True,
            date=datetime.fromisoformat(day).replace(tzinfo=timezone.utc),
        ))

    logger.info("Demo users and history seeded")


def seed(repo: Repository, demo: bool = None) -> None:
    seed_catalog(repo)
    ensure_admin(repo)
    if config.SEED_DEMO_DATA if demo is None else demo:
        seed_demo_data(repo)
