"""Shared fixtures: isolated SQLite database, seeded catalog, API clients."""

import os

# Must be set before any aptis module builds its engine or session store
os.environ["SESSION_BACKEND"] = "memory"
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite+aiosqlite://"

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from aptis import models
from aptis.models.user import ROLE_ADMIN, ROLE_LEARNER
from aptis.database import Base, get_db
from aptis.services.auth.auth_service import AuthService


@pytest.fixture
async def engine(tmp_path):
    """Fresh file-backed SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


def _user(username, role=ROLE_LEARNER):
    # Seeded users never log in with a password, so skip bcrypt hashing
    return models.User(username=username, role=role, password_hash="!")


@pytest.fixture
async def catalog(db):
    """Users, two test sets and their questions.

    ``essay_set`` is the two-question set from the end-to-end scenario:
    Q1 mcq_single key ["B"] weight 1, Q2 writing_prompt weight 5.
    ``mixed_set`` covers the other question types.
    """
    learner = _user("learner")
    other = _user("other")
    admin = _user("admin", role=ROLE_ADMIN)

    essay_set = models.TestSet(title="Writing mock", skill="Writing")
    mixed_set = models.TestSet(title="Reading mock", skill="Reading")

    q_single = models.Question(
        title="Q1", skill="Reading", type="mcq_single", stem="Pick B",
        options=["A", "B", "C"], answer_key=["B"],
    )
    q_essay = models.Question(
        title="Q2", skill="Writing", type="writing_prompt", stem="Write an essay", answer_key=None,
    )
    q_multi = models.Question(
        title="Q3", skill="Reading", type="mcq_multi", stem="Pick A and C",
        options=["A", "B", "C"], answer_key=["A", "C"],
    )
    q_blank = models.Question(
        title="Q4", skill="GrammarVocabulary", type="fill_blank", stem="The ___ of the sky",
        answer_key=["colour", "color"],
    )
    q_speaking = models.Question(
        title="Q5", skill="Speaking", type="speaking_prompt", stem="Describe your town", answer_key=None,
    )
    q_unmapped = models.Question(
        title="Q6", skill="Reading", type="mcq_single", stem="Not in any set", answer_key=["x"],
    )

    db.add_all([learner, other, admin, essay_set, mixed_set,
                q_single, q_essay, q_multi, q_blank, q_speaking, q_unmapped])
    await db.flush()

    db.add_all([
        models.SetQuestion(set_id=essay_set.id, question_id=q_single.id, section="A", order=1, score=1),
        models.SetQuestion(set_id=essay_set.id, question_id=q_essay.id, section="B", order=2, score=5),
        models.SetQuestion(set_id=mixed_set.id, question_id=q_multi.id, section="A", order=1, score=2),
        models.SetQuestion(set_id=mixed_set.id, question_id=q_blank.id, section="A", order=2, score=None),
        models.SetQuestion(set_id=mixed_set.id, question_id=q_speaking.id, section="B", order=3, score=3),
    ])
    await db.commit()

    return SimpleNamespace(
        learner=learner, other=other, admin=admin,
        essay_set=essay_set, mixed_set=mixed_set,
        q_single=q_single, q_essay=q_essay, q_multi=q_multi,
        q_blank=q_blank, q_speaking=q_speaking, q_unmapped=q_unmapped,
    )


@pytest.fixture
async def api(session_factory):
    """Factory for HTTP clients, optionally logged in as a given user."""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    async def make_client(user=None):
        cookies = {}
        if user is not None:
            session_id, _ = await AuthService.create_session(user)
            cookies["session_id"] = session_id
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test", cookies=cookies)
        clients.append(client)
        return client

    yield make_client

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()
