"""Blocking TCP client sockets."""

from __future__ import annotations

import ipaddress
import select
import socket
from typing import Optional

READ_TIMEOUT = 1.0005
"""Seconds a read waits for the peer before giving up."""

_LOOPBACK_NAMES = ("localhost", "127.0.0.1")


class TcpError(Exception):
    """Raised when a TCP connection cannot be made, read or written."""


class Socket:
    """A TCP client connection over IPv4."""

    def __init__(self, timeout: float = READ_TIMEOUT) -> None:
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    @staticmethod
    def _resolve(host: str) -> list[str]:
        if host in _LOOPBACK_NAMES:
            return ["127.0.0.1"]
        try:
            return [str(ipaddress.IPv4Address(host))]
        except ValueError:
            pass
        try:
            infos = socket.getaddrinfo(host, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as exc:
            raise TcpError(f"getaddrinfo failed for host: {host}") from exc
        addresses: list[str] = []
        for family, _, _, _, sockaddr in infos:
            if family != socket.AF_INET:
                continue
            ip = sockaddr[0]
            if ip == "0.0.0.0" or ip in addresses:
                continue
            addresses.append(ip)
        return addresses

    def connect(self, host: str, port: int) -> None:
        """Connect to ``host`` on ``port``, trying each IPv4 address in turn."""
        if self._sock is not None:
            self.close()
        last_error: Optional[OSError] = None
        for address in self._resolve(host):
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
            try:
                sock.connect((address, port))
            except OSError as exc:
                sock.close()
                last_error = exc
                continue
            self._sock = sock
            return
        raise TcpError(f"TCP failed to connect to {host}:{port}") from last_error

    def close(self) -> bool:
        """Close the connection; return whether it was open."""
        if self._sock is None:
            return False
        self._sock.close()
        self._sock = None
        return True

    def _require_open(self) -> socket.socket:
        if self._sock is None:
            raise TcpError("Socket is not connected")
        return self._sock

    @staticmethod
    def _pending(sock: socket.socket) -> bool:
        try:
            return bool(sock.recv(1, socket.MSG_PEEK))
        except (BlockingIOError, InterruptedError):
            return False
        except OSError:
            return False

    def _read(self, size: int) -> tuple[bytes, bool]:
        if size <= 0:
            raise ValueError("read size must be positive")
        sock = self._require_open()
        try:
            ready, _, _ = select.select([sock], [], [], self.timeout)
        except (OSError, ValueError) as exc:
            raise TcpError(f"Failed to read from Server socket {exc}") from exc
        if not ready:
            raise TcpError("Failed to read from Server socket")
        chunks: list[bytes] = []
        remaining = size
        sock.setblocking(False)
        try:
            while remaining > 0:
                try:
                    chunk = sock.recv(remaining)
                except (BlockingIOError, InterruptedError):
                    break
                except OSError as exc:
                    raise TcpError(f"Failed to read from Server socket {exc}") from exc
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
            more = self._pending(sock)
        finally:
            sock.setblocking(True)
        return b"".join(chunks), more

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes that are available once the peer is readable.

        Returns ``b""`` when the peer has closed the connection.
        """
        data, _ = self._read(size)
        return data

    def read_all(self, size: int) -> bytes:
        """Read in chunks of at most ``size`` bytes while more data is waiting."""
        chunks: list[bytes] = []
        while True:
            data, more = self._read(size)
            chunks.append(data)
            if not more:
                return b"".join(chunks)

    def write(self, data: bytes) -> int:
        """Send all of ``data`` and return the number of bytes sent."""
        sock = self._require_open()
        try:
            sock.sendall(data)
        except OSError as exc:
            raise TcpError(f"Failed to write to socket {exc}") from exc
        return len(data)

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()