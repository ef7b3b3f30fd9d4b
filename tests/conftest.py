"""
Movie Store — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── reset_global_store (autouse): reseeds the process-wide collection
    ├── store: isolated MovieStore holding the two seed movies
    ├── sequential_ids: deterministic id factory for create tests
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Set before any moviestore import so Settings() picks them up
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STRICT_NOT_FOUND"] = "false"
os.environ["STRICT_BODY"] = "false"
os.environ["UNIQUE_IDS"] = "false"

import itertools

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from moviestore.store import MovieStore, movie_store, seed_movies


@pytest.fixture(autouse=True)
def reset_global_store():
    """
    Reseed the process-wide store around every test.

    Why: Route tests mutate the same collection the running app uses;
    each test must start from the two seed records.
    """
    movie_store.reset()
    yield
    movie_store.reset()


@pytest.fixture
def store():
    """An isolated store holding the two seed movies."""
    return MovieStore(seed_movies())


@pytest.fixture
def sequential_ids():
    """
    Id factory yielding "100", "101", ... for predictable create tests.
    """
    counter = itertools.count(100)
    return lambda: str(next(counter))


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/movies")
            assert response.status_code == 200
    """
    from moviestore.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
