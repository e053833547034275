"""
Unit tests for writing HTTP requests.
"""

import pytest

from httppeer.errors import ConnectionFailure, InvalidArgument
from httppeer.http.connection import HttpConnection, connect
from httppeer.http.headers import HeaderList
from httppeer.http.request import HttpRequest
from httppeer.http.response import HttpResponse
from httppeer.http.uri import HttpUri
from httppeer.http.version import HTTP_1_0


def create_request(uri: str = "http://example.com/foo/resource") -> HttpRequest:
    return HttpRequest.create(HttpUri.from_string(uri), HeaderList({"X-Binford": 6100}))


class TestHttpRequest:
    """Tests for HttpRequest methods."""

    def test_get(self, serve, raw_response):
        """Test the bytes written for a GET request."""
        received = serve(raw_response())

        response = create_request().get()

        assert isinstance(response, HttpResponse)
        assert received() == (
            b"GET /foo/resource HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Binford: 6100\r\n"
            b"\r\n"
        )

    def test_get_with_query_string(self, serve, raw_response):
        """Test that GET sends the query string."""
        received = serve(raw_response())

        create_request("http://example.com/foo/resource?foo=bar").get()

        assert received().startswith(b"GET /foo/resource?foo=bar HTTP/1.1\r\n")

    def test_get_with_http_1_0(self, serve, raw_response):
        """Test the version in the request line."""
        received = serve(raw_response())

        create_request().get(version=HTTP_1_0)

        assert received().startswith(b"GET /foo/resource HTTP/1.0\r\n")

    def test_get_passes_timeout(self, serve, raw_response):
        """Test that the timeout is used to open the socket."""
        serve(raw_response())

        create_request().get(timeout=2)

        assert serve.opened == [2]

    def test_head_closes_connection(self, serve, raw_response):
        """Test that HEAD adds Connection: close."""
        received = serve(raw_response())

        create_request("http://example.com/foo/resource?foo=bar").head()

        assert received() == (
            b"HEAD /foo/resource?foo=bar HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Binford: 6100\r\n"
            b"Connection: close\r\n"
            b"\r\n"
        )

    def test_post_form(self, serve, raw_response):
        """Test that a mapping body is form-url-encoded."""
        received = serve(raw_response())

        create_request("http://example.com/foo/resource?ignored=1").post(
            {"foo": "bar", "ba z": "dum my"}
        )

        assert received() == (
            b"POST /foo/resource HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Binford: 6100\r\n"
            b"Content-Type: application/x-www-form-urlencoded\r\n"
            b"Content-Length: 20\r\n"
            b"\r\n"
            b"foo=bar&ba+z=dum+my&"
        )

    def test_post_raw_body(self, serve, raw_response):
        """Test that a string body is sent as UTF-8 with its byte length."""
        received = serve(raw_response())

        create_request().post("Jürgen")

        data = received()
        assert b"Content-Length: 7\r\n" in data
        assert b"Content-Type" not in data
        assert data.endswith("\r\n\r\nJürgen".encode("utf-8"))

    def test_put(self, serve, raw_response):
        """Test the bytes written for a PUT request."""
        received = serve(raw_response())

        create_request().put(b"data")

        assert received() == (
            b"PUT /foo/resource HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Binford: 6100\r\n"
            b"Content-Length: 4\r\n"
            b"\r\n"
            b"data"
        )

    def test_delete(self, serve, raw_response):
        """Test that DELETE sends neither body nor query string."""
        received = serve(raw_response())

        create_request("http://example.com/foo/resource?foo=bar").delete()

        assert received() == (
            b"DELETE /foo/resource HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Binford: 6100\r\n"
            b"\r\n"
        )

    def test_host_with_non_default_port(self, serve, raw_response):
        """Test that a non-default port is part of the Host header."""
        received = serve(raw_response())

        create_request("http://example.com:8080/").get()

        assert b"Host: example.com:8080\r\n" in received()

    def test_headers_are_not_changed(self, serve, raw_response):
        """Test that method specific headers do not leak into the request."""
        serve(raw_response())
        request = create_request()

        request.post({"foo": "bar"})

        assert list(request.headers) == [("X-Binford", "6100")]

    @pytest.mark.parametrize("version", ["HTTP/1.2", "HTTP/2.0", "HTTP/0.9"])
    def test_invalid_version_opens_no_socket(self, serve, version):
        """Test that the version is checked before connecting."""
        with pytest.raises(InvalidArgument) as exc_info:
            create_request().get(version=version)

        assert str(exc_info.value) == (
            f"Invalid HTTP version {version}, please use either HTTP/1.0 or HTTP/1.1."
        )
        assert serve.opened == []

    def test_unparsable_version_raises(self, serve):
        """Test garbage versions are rejected too."""
        with pytest.raises(InvalidArgument):
            create_request().get(version="invalid")

        assert serve.opened == []

    def test_write_failure_closes_stream(self, monkeypatch, peer):
        """Test that the stream is closed when writing fails."""
        stream, _ = peer
        stream.close()
        monkeypatch.setattr(HttpUri, "open_socket", lambda self, timeout=5, opener=None: stream)

        with pytest.raises(ConnectionFailure):
            create_request().get()

        assert stream.closed

    def test_write_returns_byte_count(self, peer):
        """Test that write() counts every byte."""
        stream, server = peer

        written = create_request().write(stream, "GET", HTTP_1_0, HeaderList(), None)

        expected = b"GET /foo/resource HTTP/1.0\r\nHost: example.com\r\n\r\n"
        assert written == len(expected)
        assert server.recv(1024) == expected


class TestHttpConnection:
    """Tests for the fluent connection builder."""

    def test_builder_sets_headers(self):
        """Test that every builder method adds its header."""
        connection = (
            connect("http://example.com/")
            .as_user_agent("Binford 6100")
            .refered_from("http://example.com/start")
            .with_cookie({"foo": "bar"})
            .authorized_as("user", "pass")
            .using_header("X-Binford", "More power!")
        )

        assert isinstance(connection, HttpConnection)
        assert list(connection.headers) == [
            ("User-Agent", "Binford 6100"),
            ("Referer", "http://example.com/start"),
            ("Cookie", "foo=bar;"),
            ("Authorization", "BASIC dXNlcjpwYXNz"),
            ("X-Binford", "More power!"),
        ]

    def test_get_with_timeout(self, serve, raw_response):
        """Test sending through the builder."""
        received = serve(raw_response(b"hello"))

        response = connect("http://example.com/").timeout(5).using_header("X-A", 1).get()

        assert response.body == b"hello"
        assert serve.opened == [5]
        assert received() == b"GET / HTTP/1.1\r\nHost: example.com\r\nX-A: 1\r\n\r\n"

    def test_send_by_method_name(self, serve, raw_response):
        """Test send() dispatches on the method name."""
        received = serve(raw_response())

        connect("http://example.com/").send("put", "x")

        assert received().startswith(b"PUT / HTTP/1.1\r\n")

    @pytest.mark.parametrize("method", ["PATCH", "OPTIONS"])
    def test_send_unknown_method(self, method):
        """Test that unsupported methods are rejected."""
        with pytest.raises(InvalidArgument):
            connect("http://example.com/").send(method)

    def test_connect_rejects_other_types(self):
        """Test that only strings and HttpUri instances are accepted."""
        with pytest.raises(InvalidArgument):
            connect(303)
