import pytest

from app import create_app
from models import db


@pytest.fixture
def app(tmp_path):
    # Cada test usa su propia base SQLite en disco (los hilos comparten el archivo)
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///' + str(tmp_path / 'test.sqlite'),
        'LOG_LEVEL': 'DEBUG',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture
def catalog(app):
    return app.extensions['booking']['catalog']


@pytest.fixture
def ledger(app):
    return app.extensions['booking']['ledger']


@pytest.fixture
def accounts(app):
    return app.extensions['booking']['accounts']
