import pytest

from sortviz.app import app, SESSIONS


@pytest.fixture
def client():
    app.config["TESTING"] = True
    SESSIONS.clear()
    with app.test_client() as c:
        yield c
    SESSIONS.clear()
