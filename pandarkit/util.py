"""Socket helpers, wall-clock time and the SDK version banner."""

from __future__ import annotations

import enum
import select
import socket
import sys
import time

VERSION = "PandarGeneralSDK_1.1.15"

# Seconds to wait for a read or write on a command connection.
DEFAULT_TIMEOUT = 10


class WaitFor(enum.IntEnum):
    """Socket state that select_fd waits for."""

    READ = 0
    WRITE = 1
    CONN = 2


def readn(sock: socket.socket, n: int) -> bytes:
    """Read up to ``n`` bytes, stopping early only when the peer closes."""
    chunks: list[bytes] = []
    remaining = n
    while remaining > 0:
        chunk = sock.recv(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def writen(sock: socket.socket, data: bytes) -> int:
    """Write all of ``data`` and return the number of bytes written."""
    sock.sendall(data)
    return len(data)


def tcp_open(ipaddr: str, port: int, timeout: float | None = None) -> socket.socket:
    """Open a TCP connection to an IPv4 or IPv6 address.

    Raises ValueError for an address that is not a numeric IP and OSError
    when the connection cannot be made.
    """
    family = socket.AF_INET6 if ":" in ipaddr else socket.AF_INET
    try:
        socket.inet_pton(family, ipaddr)
    except OSError as exc:
        raise ValueError(f"invalid IP address: {ipaddr!r}") from exc

    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.settimeout(timeout)
        sock.connect((ipaddr, port))
    except OSError:
        sock.close()
        raise
    return sock


def select_fd(sock: socket.socket, timeout: float, wait_for: WaitFor) -> int:
    """Wait until the socket is ready; return how many readiness events fired.

    Zero means the timeout expired first.
    """
    wait_for = WaitFor(wait_for)
    readers = [sock] if wait_for in (WaitFor.READ, WaitFor.CONN) else []
    writers = [sock] if wait_for in (WaitFor.WRITE, WaitFor.CONN) else []
    ready_read, ready_write, _ = select.select(readers, writers, [], timeout)
    return len(ready_read) + len(ready_write)


def now_time_sec() -> float:
    """Current wall-clock time in seconds since the epoch."""
    return time.time()


def print_version() -> str:
    """Print the version banner to standard output and return it."""
    rule = "       " + "/" * 63
    banner = (
        f"{rule}\n"
        f"       //     PandarGeneralSDK version: {VERSION}      //\n"
        f"{rule}\n"
    )
    sys.stdout.write(banner)
    return banner