from sqlmodel import SQLModel, create_engine
from sqlalchemy.pool import NullPool
from .config import DATABASE_URL
from .repository import SqlRepository

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    poolclass=NullPool,
    pool_pre_ping=True,
    connect_args=connect_args,
)

repository = SqlRepository(engine)


def init_db():
    SQLModel.metadata.create_all(engine)


def get_repository():
    return repository
