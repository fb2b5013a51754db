# app/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.utils.settings import DATABASE_URL

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    #jedna sesja na request, zamykana po odpowiedzi
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    #import modeli zeby SQLAlchemy zarejestrowal je w Base.metadata przed create_all
    import app.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
