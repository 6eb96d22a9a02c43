"""HTTP/1.1 requests and responses: rendering, parsing and sending."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ramnet.tcp import Socket, TcpError

VERSION = "HTTP/1.1"
EOL = "\n"
REQUEST_BUFFER = 4096
"""Bytes read from the server per chunk when a request is sent."""

INVALIDATED_EXPIRES = "Sat, 25-Apr-2015 13:33:33 GMT"

_DEFAULT_HEADERS = (("Connection", "close"), ("Accept", "text/html"))


class HttpError(Exception):
    """Raised when an HTTP message cannot be sent or parsed."""


@dataclass
class Cookie:
    """A cookie set by a response."""

    value: str = ""
    domain: str = ""
    path: str = ""
    http_only: bool = False
    secure: bool = False
    expires: str = ""
    invalidated: bool = False

    def invalidate(self) -> "Cookie":
        """Mark the cookie so that the client discards it."""
        self.invalidated = True
        return self

    def _render(self, name: str) -> str:
        parts = [f"Set-Cookie: {name}={self.value}; "]
        if self.domain:
            parts.append(f"domain={self.domain}; ")
        if self.path:
            parts.append(f"path={self.path}; ")
        if self.http_only:
            parts.append("httponly; ")
        if self.secure:
            parts.append("secure; ")
        if self.invalidated:
            parts.append(f"expires={INVALIDATED_EXPIRES}; maxage=-1; ")
        elif self.expires:
            parts.append(f"expires={self.expires}; ")
        return "".join(parts)

    @classmethod
    def _parse(cls, text: str) -> tuple[str, "Cookie"]:
        parts = [part.strip() for part in text.split(";")]
        name, _, value = parts[0].partition("=")
        cookie = cls(value.strip())
        for attr in parts[1:]:
            if not attr:
                continue
            key, _, val = attr.partition("=")
            key = key.strip().lower()
            val = val.strip()
            if key == "domain":
                cookie.domain = val
            elif key == "path":
                cookie.path = val
            elif key == "httponly":
                cookie.http_only = True
            elif key == "secure":
                cookie.secure = True
            elif key == "expires":
                cookie.expires = val
            elif key in ("maxage", "max-age") and val == "-1":
                cookie.invalidated = True
        if cookie.invalidated:
            cookie.expires = ""
        return name.strip(), cookie


class Request:
    """An HTTP/1.1 request to ``host`` on ``port`` for ``path``."""

    method = ""

    def __init__(
        self,
        host: str,
        path: str = "",
        port: int = 80,
        ip: str = "",
        body: str = "",
    ) -> None:
        self.host = host
        self.path = path
        self.port = port
        self.ip = ip
        self.body = body
        self.headers: dict[str, str] = {}
        self.cookies: dict[str, str] = {}
        self.response: Optional[Response] = None

    @property
    def version(self) -> str:
        return VERSION

    def header(self, key: str, value: Optional[str] = None) -> Union["Request", str, None]:
        """Set a header and return the request, or look one up when no value is given."""
        if value is None:
            return self.headers.get(key)
        self.headers[key] = value
        return self

    def cookie(self, key: str, value: Optional[str] = None) -> Union["Request", str, None]:
        """Set a cookie and return the request, or look one up when no value is given."""
        if value is None:
            return self.cookies.get(key)
        self.cookies[key] = value
        return self

    def default_headers(self, body: str = "") -> dict[str, str]:
        """Headers added to the rendered request unless already provided."""
        defaults: dict[str, str] = {}
        chunked = "Transfer-Encoding" in self.headers
        if not chunked:
            for key, value in _DEFAULT_HEADERS:
                if key not in self.headers:
                    defaults[key] = value
        if body and "Content-Length" not in self.headers and not chunked:
            defaults["Content-Length"] = str(len(body.encode("utf-8")))
        return defaults

    def _target(self) -> str:
        return "/" + self.path

    def _render(self, body: str) -> str:
        parts = [f"{self.method} {self._target()} {self.version}", f"\r\nHost: {self.host}"]
        for key, value in self.headers.items():
            parts.append(f"\r\n{key}: {value}")
        for key, value in self.default_headers(body).items():
            parts.append(f"\r\n{key}: {value}")
        if self.cookies:
            parts.append("\r\nCookie: ")
            parts.extend(f"{key}={value}; " for key, value in self.cookies.items())
        parts.append("\r\n\r\n")
        parts.append(body)
        return "".join(parts)

    def render(self) -> str:
        """Return the request as it is sent on the wire."""
        return self._render(self.body)

    def send(self) -> "Response":
        """Send the request, parse the reply and pass it to :meth:`handle_response`."""
        with Socket() as sock:
            try:
                sock.connect(self.host, self.port)
            except TcpError as exc:
                raise HttpError("TCP FAILED TO CONNECT!") from exc
            try:
                sock.write(self.render().encode("utf-8"))
                raw = sock.read_all(REQUEST_BUFFER)
            except TcpError as exc:
                raise HttpError(f"HTTP request failed: {exc}") from exc
        response = Response.from_string(raw.decode("utf-8", errors="replace"))
        self.handle_response(response)
        return response

    def handle_response(self, response: "Response") -> None:
        """Receive the parsed reply; by default it is kept on ``self.response``."""
        self.response = response


class GetRequest(Request):
    """A GET request whose parameters go into the query string."""

    method = "GET"

    def __init__(
        self,
        host: str,
        path: str = "",
        port: int = 80,
        ip: str = "",
        body: str = "",
    ) -> None:
        super().__init__(host, path, port, ip, body)
        self.params: dict[str, str] = {}

    def param(self, key: str, value: str) -> "GetRequest":
        self.params[key] = value
        return self

    def _target(self) -> str:
        target = "/" + self.path
        if self.params:
            target += "?" + "&".join(f"{k}={v}" for k, v in self.params.items())
        return target

    def render(self) -> str:
        return self._render("")


class PostRequest(Request):
    """A POST request carrying ``body``."""

    method = "POST"

    def render(self) -> str:
        return self._render(self.body)


class Response:
    """An HTTP/1.1 response."""

    def __init__(self, status: int = 200, reason: str = "OK", body: str = "") -> None:
        self.status = status
        self.reason = reason
        self.body = body
        self.version = VERSION
        self.headers: dict[str, str] = {}
        self.cookies: dict[str, Cookie] = {}

    def header(self, key: str, value: Optional[str] = None) -> Union["Response", str, None]:
        """Set a header and return the response, or look one up when no value is given."""
        if value is None:
            return self.headers.get(key)
        self.headers[key] = value
        return self

    def cookie(
        self, key: str, value: Union[str, Cookie, None] = None
    ) -> Optional[Cookie]:
        """Set a cookie and return it, or look one up when no value is given."""
        if value is None:
            return self.cookies.get(key)
        cookie = value if isinstance(value, Cookie) else Cookie(value)
        self.cookies[key] = cookie
        return cookie

    def render(self) -> str:
        """Return the response as it is sent on the wire."""
        parts = [f"{self.version} {self.status} {self.reason}{EOL}"]
        parts.extend(f"{key}: {value}{EOL}" for key, value in self.headers.items())
        parts.extend(cookie._render(name) + EOL for name, cookie in self.cookies.items())
        parts.append(EOL + self.body + "\r\n\x00")
        return "".join(parts)

    @classmethod
    def from_string(cls, text: str) -> "Response":
        """Parse a response received from a server."""
        response = cls()
        lines = text.split("\n")
        bits = lines[0].rstrip("\r").split()
        if len(bits) > 1:
            try:
                response.status = int(bits[1])
            except ValueError as exc:
                raise HttpError(f"Invalid status code: {bits[1]}") from exc
            if not 0 <= response.status <= 0xFFFF:
                raise HttpError(f"Invalid status code: {bits[1]}")
        if len(bits) > 2:
            response.reason = " ".join(bits[2:])
        if bits:
            response.version = bits[0]
        response.body = ""
        for index, line in enumerate(lines[1:], start=1):
            line = line.rstrip("\r")
            if not line.strip():
                response.body = "\n".join(lines[index + 1 :])
                break
            if line.startswith("Set-Cookie:"):
                name, cookie = Cookie._parse(line[len("Set-Cookie:") :].strip())
                response.cookies[name] = cookie
            elif ":" in line:
                key, _, value = line.partition(":")
                response.headers[key.strip()] = value.strip()
            else:
                response.headers[line] = ""
        return response