"""Tests for the requests-based DreamAPI client."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from dream_api_client import DreamAPI


_NO_JSON = object()


def make_response(status_code: int = 200, json_data=_NO_JSON, headers=None, text: str = "") -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.text = text
    if json_data is _NO_JSON:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error", response=response)
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session) -> DreamAPI:
    return DreamAPI(base_url="http://dreams.local/", session=session)


class TestRequests:
    def test_list_dreams(self, api, session) -> None:
        session.request.return_value = make_response(json_data=[{"id": "a"}])

        dreams, error = api.list_dreams()

        assert dreams == [{"id": "a"}]
        assert error is None
        session.request.assert_called_once_with(
            method="GET", url="http://dreams.local/dreams", json=None, timeout=15
        )

    def test_get_missing_dream(self, api, session) -> None:
        session.request.return_value = make_response(json_data=None)

        dream, error = api.get_dream("missing")

        assert dream is None
        assert error is None

    def test_create_returns_id_from_location(self, api, session) -> None:
        session.request.return_value = make_response(201, headers={"Location": "/dreams/abc-123"})

        dream_id, error = api.create_dream({"title": "Flight"})

        assert dream_id == "abc-123"
        assert error is None
        assert session.request.call_args.kwargs["json"] == {"title": "Flight"}

    def test_update_sends_put(self, api, session) -> None:
        session.request.return_value = make_response(204)

        ok, error = api.update_dream("abc", {"category": "fantasy"})

        assert ok is True
        assert error is None
        assert session.request.call_args.kwargs["method"] == "PUT"
        assert session.request.call_args.kwargs["url"] == "http://dreams.local/dreams/abc"

    def test_delete_all(self, api, session) -> None:
        session.request.return_value = make_response(204)

        ok, error = api.delete_all_dreams()

        assert ok is True
        assert session.request.call_args.kwargs["url"] == "http://dreams.local/dreams"


class TestErrors:
    def test_http_error_uses_detail(self, api, session) -> None:
        session.request.return_value = make_response(409, json_data={"detail": "Update conflict! Please try again"})

        ok, error = api.update_dream("abc", {"title": "X"})

        assert ok is False
        assert error == {"status_code": 409, "message": "Update conflict! Please try again"}

    def test_http_error_without_json_uses_text(self, api, session) -> None:
        session.request.return_value = make_response(500, text="Internal Server Error")

        dreams, error = api.list_dreams()

        assert dreams == []
        assert error == {"status_code": 500, "message": "Internal Server Error"}

    @pytest.mark.parametrize("body", [None, ["oops"], "text"])
    def test_http_error_with_non_object_json_uses_text(self, api, session, body) -> None:
        session.request.return_value = make_response(502, json_data=body, text="Bad Gateway")

        dreams, error = api.list_dreams()

        assert dreams == []
        assert error == {"status_code": 502, "message": "Bad Gateway"}

    def test_validation_error_detail_becomes_string(self, api, session) -> None:
        detail = [{"loc": ["body"], "msg": "bad"}]
        session.request.return_value = make_response(422, json_data={"detail": detail})

        dream_id, error = api.create_dream({"title": 1})

        assert dream_id is None
        assert error["status_code"] == 422
        assert isinstance(error["message"], str)
        assert json.loads(error["message"]) == detail

    def test_network_error(self, api, session) -> None:
        session.request.side_effect = requests.ConnectionError("refused")

        ok, error = api.delete_dream("abc")

        assert ok is False
        assert error["status_code"] is None
        assert "refused" in error["message"]
