"""AgreeDisagreeClient against a live uvicorn server."""

import pytest

from agree_disagree_api.app.services.storage import AgreeDisagreeStorage
from agree_disagree_client import AgreeDisagreeClient


@pytest.fixture
def api(app, live_server):
    store = AgreeDisagreeStorage("test3", app.state.route_registry)
    yield AgreeDisagreeClient(base_url=live_server, client_name="test3")
    store.close()


def test_questions_over_http(api):
    data, error = api.get_question(1)
    assert data is None
    assert error == {"status_code": 404, "message": "QUESTION NOT FOUND"}

    data, error = api.add_question("Why?")
    assert error is None
    assert data == {"qid": 1, "text": "Why?"}

    _, error = api.add_question("Why?")
    assert error["status_code"] == 400
    assert error["message"] == "DUPLICATE QUESTION"

    data, error = api.get_question(1)
    assert data == {"qid": 1, "text": "Why?"}


def test_users_over_http(api):
    _, error = api.get_user("adam")
    assert error["status_code"] == 404

    data, error = api.add_user("adam")
    assert error is None
    assert data == {"uid": "adam", "answers": []}

    _, error = api.add_user("adam")
    assert error == {"status_code": 400, "message": "CANNOT READD USER"}

    data, _ = api.get_user("adam")
    assert data["uid"] == "adam"


def test_ping_follows_store_scope(app, live_server):
    api = AgreeDisagreeClient(base_url=live_server, client_name="test4")
    assert not api.ping()
    with AgreeDisagreeStorage("test4", app.state.route_registry):
        assert api.ping()
    assert not api.ping()
