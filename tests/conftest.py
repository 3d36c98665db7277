import datetime
import pytest
from flask import Flask

from otter import Otter, ResourceRegistry, ModelStore, RelationResolver, EnvelopeBuilder
import sample_models as models
import sample_resources as resources

CREATED = datetime.datetime(2021, 5, 6, 7, 8, 9)


def populate(db):
    alice = models.User(id=1, name="alice", email="alice@example.com", password="secret", created_at=datetime.datetime(2020, 1, 2, 3, 4, 5))
    bob = models.User(id=2, name="bob", email="bob@example.com", password="hunter2")
    profile = models.Profile(id=1, bio="Writes about otters", user=alice)
    python = models.Tag(id=1, name="python")
    flask = models.Tag(id=2, name="flask")
    post = models.Post(id=1, slug="hello-world", title="Hello World", body="...", author=alice, tags=[python, flask], created_at=CREATED)
    draft = models.Post(id=2, slug="draft", title="Draft", body="")
    comment = models.Comment(id=1, body="Nice!", post_id=1)
    setting = models.Setting(id=1, name="maintenance", enabled=False)
    db.session.add_all([alice, bob, profile, python, flask, post, draft, comment, setting])
    db.session.commit()


@pytest.fixture
def registry():
    return ResourceRegistry(
        [resources.User, resources.Profile, resources.Post, resources.Tag, resources.Comment], namespace="sample_resources"
    )


@pytest.fixture
def app(registry):
    app = Flask("otter_test")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", TESTING=True)
    models.db.init_app(app)
    with app.app_context():
        models.db.create_all()
        populate(models.db)
        Otter(app, registry=registry)
        yield app
        models.db.session.remove()
        models.db.drop_all()


@pytest.fixture
def otter_ext(app):
    return app.extensions["otter"]


@pytest.fixture
def store(app):
    return ModelStore(models.db)


@pytest.fixture
def resolver(registry, store):
    return RelationResolver(registry, store)


@pytest.fixture
def builder(resolver):
    return EnvelopeBuilder(resolver)


@pytest.fixture(autouse=True)
def _reset_auth(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Otter, "auth_using", None)


@pytest.fixture
def allow_dashboard(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Otter, "auth_using", staticmethod(lambda request: True))


@pytest.fixture
def client(app, allow_dashboard):
    return app.test_client()
