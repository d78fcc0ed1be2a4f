import pytest

from app import create_app
from config import TestingConfig
import documents


@pytest.fixture
def app(tmp_path):
    app = create_app(
        TestingConfig,
        SECRET_KEY='test-secret',
        DATA_PATH=str(tmp_path / 'data'),
        USERS_PATH=str(tmp_path / 'users.yml'),
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    with client.session_transaction() as sess:
        sess['username'] = 'admin'
    return client


@pytest.fixture
def create_doc(app):
    """Write a document straight into the data directory."""
    def _create(name, content=''):
        with app.app_context():
            with open(documents.document_path(name), 'w', encoding='utf-8') as f:
                f.write(content)
    return _create


@pytest.fixture
def flashes(client):
    """Pending flash messages in the client's session."""
    def _flashes():
        with client.session_transaction() as sess:
            return [message for _, message in sess.get('_flashes', [])]
    return _flashes


@pytest.fixture
def session_username(client):
    def _username():
        with client.session_transaction() as sess:
            return sess.get('username')
    return _username
