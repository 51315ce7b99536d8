"""Test configuration and fixtures for ormgql."""

import os

import pytest
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from ormgql import Types
from tests.models import Base, Comment, Post, PostStatus, User

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture(scope="function")
def engine():
    """Create a test database engine for each test function."""
    test_db_url = os.getenv('ORMGQL_TEST_DATABASE_URL')

    if test_db_url:
        engine = create_engine(test_db_url, echo=False, future=True, pool_pre_ping=True)
        # Ensure a clean slate before tests
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        print(f"Using external database: {test_db_url}")
    else:
        engine = create_engine("sqlite:///:memory:", echo=False, future=True)
        Base.metadata.create_all(engine)

    yield engine

    if test_db_url:
        Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Create a new database session for each test function."""
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture(scope="function")
def types(db_session):
    """Type registry bound to the test session."""
    return Types(db_session)


@pytest.fixture(scope="function")
def populated_db(db_session):
    """A user with two posts, one of them commented."""
    alice = User(name='alice', email='alice@example.com', password='x')
    bob = User(name='bob', email=None, password='y')
    db_session.add_all([alice, bob])
    db_session.flush()

    first = Post(title='First post', content='Hello world, this is long', status=PostStatus.PUBLISHED, views=10, user=alice)
    second = Post(title='Second post', content=None, user=alice)
    db_session.add_all([first, second])
    db_session.flush()

    comment = Comment(content='Nice', post=first, user_id=bob.id)
    db_session.add(comment)
    db_session.commit()

    return {'users': [alice, bob], 'posts': [first, second], 'comments': [comment]}
