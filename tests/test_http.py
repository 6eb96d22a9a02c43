import socket
import threading

import pytest

from ramnet.http import (
    Cookie,
    GetRequest,
    HttpError,
    PostRequest,
    Request,
    Response,
)


def test_get_render_with_params():
    req = GetRequest("example.com", "index").param("a", "1").param("b", "2")
    assert req.render() == (
        "GET /index?a=1&b=2 HTTP/1.1\r\nHost: example.com"
        "\r\nConnection: close\r\nAccept: text/html\r\n\r\n"
    )


def test_get_render_headers_and_cookies():
    req = GetRequest("example.com")
    req.header("X-Test", "1")
    req.cookie("sid", "token")
    text = req.render()
    assert text.startswith("GET / HTTP/1.1\r\nHost: example.com\r\nX-Test: 1")
    assert "\r\nCookie: sid=token; \r\n\r\n" in text
    assert text.endswith("\r\n\r\n")


def test_transfer_encoding_suppresses_defaults():
    req = PostRequest("example.com", "up", body="data")
    req.header("Transfer-Encoding", "chunked")
    text = req.render()
    assert "Connection" not in text
    assert "Content-Length" not in text
    assert text.endswith("\r\n\r\ndata")


def test_post_render_adds_content_length_and_body():
    req = PostRequest("example.com", "submit", body="a=1")
    assert req.render() == (
        "POST /submit HTTP/1.1\r\nHost: example.com\r\nConnection: close"
        "\r\nAccept: text/html\r\nContent-Length: 3\r\n\r\na=1"
    )


def test_default_headers_respects_explicit_length():
    req = PostRequest("example.com", body="abc")
    req.header("Content-Length", "3")
    assert "Content-Length" not in req.default_headers("abc")


def test_header_lookup():
    req = GetRequest("example.com")
    assert req.header("Accept") is None
    assert req.header("Accept", "text/plain") is req
    assert req.header("Accept") == "text/plain"


def test_response_render():
    res = Response(body="hi")
    res.header("Content-Type", "text/html")
    assert res.render() == "HTTP/1.1 200 OK\nContent-Type: text/html\n\nhi\r\n\x00"


def test_response_cookie_render():
    res = Response()
    cookie = res.cookie("sid", "token")
    cookie.path = "/"
    cookie.http_only = True
    assert "Set-Cookie: sid=token; path=/; httponly; \n" in res.render()


def test_invalidated_cookie_render():
    res = Response()
    res.cookie("sid", "token").invalidate()
    assert (
        "Set-Cookie: sid=token; expires=Sat, 25-Apr-2015 13:33:33 GMT; maxage=-1; \n"
        in res.render()
    )


def test_from_string_parses_parts():
    res = Response.from_string(
        "HTTP/1.1 404 Not Found\r\nContent-Type: text/html\r\nDate: 12:00\r\n\r\nbody"
    )
    assert res.status == 404
    assert res.reason == "Not Found"
    assert res.header("Content-Type") == "text/html"
    assert res.header("Date") == "12:00"
    assert res.body == "body"


def test_from_string_invalid_status():
    with pytest.raises(HttpError):
        Response.from_string("HTTP/1.1 abc OK\r\n\r\n")


def test_round_trip():
    res = Response(status=201, reason="Created", body="hello")
    res.header("X-One", "1")
    cookie = res.cookie("sid", "token")
    cookie.domain = "example.com"
    cookie.secure = True
    res.cookie("old", "token").invalidate()
    parsed = Response.from_string(res.render())
    assert parsed.status == 201
    assert parsed.reason == "Created"
    assert parsed.headers == {"X-One": "1"}
    assert parsed.cookies["sid"] == Cookie("token", domain="example.com", secure=True)
    assert parsed.cookies["old"].invalidated
    assert parsed.body.startswith("hello")


def _serve_once(reply):
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    received = []

    def run():
        conn, _ = listener.accept()
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = conn.recv(4096)
            if not chunk:
                break
            data += chunk
        received.append(data)
        conn.sendall(reply)
        conn.close()
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return listener.getsockname()[1], thread, received


def test_send_parses_reply():
    port, thread, received = _serve_once(b"HTTP/1.1 200 OK\r\nX-Reply: yes\r\n\r\nhi")
    req = GetRequest("127.0.0.1", "page", port)
    res = req.send()
    thread.join(5)
    assert received[0].startswith(b"GET /page HTTP/1.1\r\n")
    assert res.status == 200
    assert res.header("X-Reply") == "yes"
    assert res.body == "hi"
    assert req.response is res


def test_send_connect_failure():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(HttpError):
        Request("127.0.0.1", "", port).send()