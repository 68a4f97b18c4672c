"""Robust buffered reading and complete writing on stream sockets."""

from __future__ import annotations

from typing import Iterator, Protocol

RIO_BUFSIZE = 8192
MAXLINE = 8192
MAXBUF = 8192
LISTENQ = 1024


class NetError(OSError):
    """Raised when a socket read or write fails."""


class _Receiver(Protocol):
    def recv(self, bufsize: int) -> bytes: ...


class _Sender(Protocol):
    def sendall(self, data: bytes) -> None: ...


class RioReader:
    """Buffered reader over a socket-like object with a ``recv`` method."""

    def __init__(self, sock: _Receiver):
        self.sock = sock
        self._buf = b""
        self._pos = 0

    def _fill(self) -> bool:
        """Make sure unread bytes are buffered; False at end of stream."""
        if self._pos < len(self._buf):
            return True
        while True:
            try:
                data = self.sock.recv(RIO_BUFSIZE)
            except InterruptedError:
                continue
            except OSError as exc:
                raise NetError(exc.errno, f"read failed: {exc}") from exc
            break
        if not data:
            return False
        self._buf = data
        self._pos = 0
        return True

    def read_line(self, maxlen: int = MAXLINE) -> bytes:
        """Read one line, newline included, of at most ``maxlen - 1`` bytes.

        Returns b"" at end of stream when nothing was read.
        """
        limit = maxlen - 1
        out = bytearray()
        while len(out) < limit:
            if not self._fill():
                break
            chunk = self._buf[self._pos:self._pos + (limit - len(out))]
            newline = chunk.find(b"\n")
            if newline >= 0:
                chunk = chunk[:newline + 1]
            out += chunk
            self._pos += len(chunk)
            if newline >= 0:
                break
        return bytes(out)

    def read_n(self, n: int) -> bytes:
        """Read up to ``n`` bytes, fewer only if the stream ends first."""
        out = bytearray()
        while len(out) < n:
            if not self._fill():
                break
            chunk = self._buf[self._pos:self._pos + (n - len(out))]
            out += chunk
            self._pos += len(chunk)
        return bytes(out)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.read_line()
            if not line:
                return
            yield line


def write_all(sock: _Sender, data: bytes | str) -> int:
    """Send every byte of ``data``; returns the number of bytes sent."""
    payload = data.encode() if isinstance(data, str) else bytes(data)
    while True:
        try:
            sock.sendall(payload)
        except InterruptedError:
            continue
        except OSError as exc:
            raise NetError(exc.errno, f"write failed: {exc}") from exc
        return len(payload)