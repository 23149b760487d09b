"""Tests for authentication providers."""

import pytest

from selectel_storage import AuthenticationError, SelectelAuthentication, StaticAuthentication
from selectel_storage.utils.http import HttpResponse

from .fakes import FakeHttpClient

AUTH_URL = "https://auth.example.com/"


class ScriptedAuthClient(FakeHttpClient):
    def __init__(self, response):
        super().__init__(jitter=0)
        self.response = response

    def send(self, request):
        self.sent.append(request)
        return self.response


def _ok_response(expire="3600"):
    headers = {
        "X-Storage-Url": "https://storage.example.com/v1/SEL_1/",
        "X-Auth-Token": "fresh-token",
    }
    if expire is not None:
        headers["X-Expire-Auth-Token"] = expire
    return HttpResponse(status_code=204, reason="No Content", headers=headers)


class TestStaticAuthentication:
    def test_returns_values(self):
        auth = StaticAuthentication("https://s.example/v1/", "tok")

        assert auth.get_storage_url() == "https://s.example/v1"
        assert auth.get_auth_token() == "tok"

    def test_missing_values_raise(self):
        auth = StaticAuthentication("", "")

        with pytest.raises(AuthenticationError):
            auth.get_storage_url()
        with pytest.raises(AuthenticationError):
            auth.get_auth_token()


class TestSelectelAuthentication:
    def test_handshake_is_lazy_and_cached(self):
        client = ScriptedAuthClient(_ok_response())
        auth = SelectelAuthentication("user", "key", AUTH_URL, client)

        assert client.sent == []
        assert auth.get_storage_url() == "https://storage.example.com/v1/SEL_1"
        assert auth.get_auth_token() == "fresh-token"

        assert len(client.sent) == 1
        request = client.sent[0]
        assert request.method == "GET"
        assert request.url == AUTH_URL
        assert request.headers == {"X-Auth-User": "user", "X-Auth-Key": "key"}

    def test_expired_token_is_renewed(self):
        client = ScriptedAuthClient(_ok_response(expire="0"))
        auth = SelectelAuthentication("user", "key", AUTH_URL, client)

        auth.get_auth_token()
        auth.get_auth_token()

        assert len(client.sent) == 2

    def test_forbidden_is_bad_credentials(self):
        client = ScriptedAuthClient(HttpResponse(status_code=403, reason="Forbidden"))
        auth = SelectelAuthentication("user", "wrong", AUTH_URL, client)

        with pytest.raises(AuthenticationError, match="bad credentials"):
            auth.get_auth_token()

    def test_unexpected_status(self):
        client = ScriptedAuthClient(HttpResponse(status_code=500, reason="Oops"))
        auth = SelectelAuthentication("user", "key", AUTH_URL, client)

        with pytest.raises(AuthenticationError, match="500"):
            auth.get_storage_url()

    def test_missing_headers(self):
        client = ScriptedAuthClient(HttpResponse(status_code=204, reason="No Content"))
        auth = SelectelAuthentication("user", "key", AUTH_URL, client)

        with pytest.raises(AuthenticationError, match="missing"):
            auth.get_storage_url()

    def test_transport_fault(self):
        client = FakeHttpClient(jitter=0)
        client.fail("GET", AUTH_URL)
        auth = SelectelAuthentication("user", "key", AUTH_URL, client)

        with pytest.raises(AuthenticationError, match="Cannot reach"):
            auth.get_auth_token()

    def test_missing_credentials(self):
        client = ScriptedAuthClient(_ok_response())
        auth = SelectelAuthentication("", "", AUTH_URL, client)

        with pytest.raises(AuthenticationError):
            auth.get_auth_token()

        assert client.sent == []
