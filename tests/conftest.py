import pytest

import webhook


@pytest.fixture()
def app():
    app = webhook.create_app(TESTING=True)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()
