from http import HTTPStatus

import pytest
from flask import Flask

from otter import Otter
import sample_models as models

PREFIX = "/otter/api"


def test_index(client) -> None:
    response = client.get(f"{PREFIX}/")
    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert body["data"] == ["comments", "posts", "profiles", "tags", "users"]
    assert body["meta"]["names"] == ["Comments", "Posts", "Profiles", "Tags", "Users"]


def test_dashboard_gate_denies_by_default(app) -> None:
    response = app.test_client().get(f"{PREFIX}/posts")
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.get_json()["errors"][0]["code"] == "403"


def test_dashboard_gate_allows_debug_app(app) -> None:
    app.debug = True
    assert app.test_client().get(f"{PREFIX}/").status_code == HTTPStatus.OK


def test_auth_callback(app) -> None:
    requests = []

    def allow_admin(request):
        requests.append(request.path)
        return request.headers.get("X-Admin") == "yes"

    Otter.auth(allow_admin)
    client = app.test_client()
    assert client.get(f"{PREFIX}/", headers={"X-Admin": "no"}).status_code == HTTPStatus.FORBIDDEN
    assert client.get(f"{PREFIX}/", headers={"X-Admin": "yes"}).status_code == HTTPStatus.OK
    assert requests == [f"{PREFIX}/", f"{PREFIX}/"]


def test_collection(client) -> None:
    response = client.get(f"{PREFIX}/posts")
    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert [post["route_key"] for post in body["data"]] == ["hello-world", "draft"]
    assert body["meta"]["count"] == 2
    assert body["meta"]["title"] == "Blog Posts"
    assert body["meta"]["fields"] == {"title": "string", "slug": "string", "user_id": "integer"}


def test_collection_pagination(client) -> None:
    body = client.get(f"{PREFIX}/posts?page[offset]=1&page[limit]=1").get_json()
    assert [post["route_key"] for post in body["data"]] == ["draft"]
    assert body["meta"]["count"] == 2
    assert body["meta"]["limit"] == 1


@pytest.mark.parametrize("query", ["page[limit]=abc", "page[offset]=-1"])
def test_collection_invalid_pagination(client, query: str) -> None:
    response = client.get(f"{PREFIX}/posts?{query}")
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "Pagination Error" in response.get_json()["errors"][0]["title"]


def test_unknown_resource(client) -> None:
    response = client.get(f"{PREFIX}/ghosts")
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_instance(client) -> None:
    response = client.get(f"{PREFIX}/posts/hello-world")
    assert response.status_code == HTTPStatus.OK
    data = response.get_json()["data"]
    assert data["route_key"] == "hello-world"
    assert data["created_at"] == "2021-05-06 07:08:09"
    assert data["deleted_at"] is None
    assert data["relations"]["author"]["relationshipId"] == 1
    assert data["relations"]["author"]["resourceName"] == "users"
    assert sorted(data["relations"]["tags"]["relationshipId"]) == [1, 2]


def test_instance_not_found(client) -> None:
    response = client.get(f"{PREFIX}/posts/no-such-post")
    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["errors"][0]["code"] == "404"


def test_relations(client) -> None:
    response = client.get(f"{PREFIX}/users/1/relations")
    assert response.status_code == HTTPStatus.OK
    profile = response.get_json()["data"]["profile"]
    assert profile["relationshipType"] == "HasOne"
    assert profile["resourceId"] == 1


def test_relational_data(client) -> None:
    response = client.get(f"{PREFIX}/posts/-/relational-data")
    assert response.status_code == HTTPStatus.OK
    data = response.get_json()["data"]
    assert sorted(data) == ["author", "comments", "tags"]
    assert len(data["author"]) == 2


def test_instance_with_relational_data_route_key(app, client) -> None:
    models.db.session.add(models.Post(id=3, slug="relational-data", title="Relational Data"))
    models.db.session.commit()

    response = client.get(f"{PREFIX}/posts/relational-data")
    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["data"]["title"] == "Relational Data"


def test_custom_url_prefix(registry, allow_dashboard) -> None:
    app = Flask("otter_prefix_test")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", TESTING=True)
    models.db.init_app(app)
    Otter(app, registry=registry, prefix="/admin/api")

    with app.app_context():
        models.db.create_all()
        client = app.test_client()
        assert client.get("/admin/api/").get_json()["data"] == ["comments", "posts", "profiles", "tags", "users"]
        assert client.get(f"{PREFIX}/").status_code == HTTPStatus.NOT_FOUND
