"""Client for the lidar's TCP command protocol (port 9347)."""

from __future__ import annotations

import enum
import struct
import threading
from dataclasses import dataclass

from pandarkit.util import DEFAULT_TIMEOUT, readn, tcp_open, writen

MAGIC = b"\x47\x74"
HEADER_SIZE = 6
DEFAULT_PORT = 9347

_HEADER = struct.Struct(">BBI")


class PtcCommand(enum.IntEnum):
    """Command identifiers understood by the device."""

    GET_CALIBRATION = 0
    SET_CALIBRATION = 1
    HEARTBEAT = 2
    RESET_CALIBRATION = 3
    TEST = 4
    GET_LIDAR_CALIBRATION = 5


class PtcErrorCode(enum.IntEnum):
    """Error codes of the command client."""

    NO_ERROR = 0
    BAD_PARAMETER = 1
    CONNECT_SERVER_FAILED = 2
    TRANSFER_FAILED = 3
    NO_MEMORY = 4


class PtcError(Exception):
    """A command failed; ``code`` is a PtcErrorCode or the device's return code."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"command failed with code {int(code)}")
        self.code = code


@dataclass(frozen=True)
class CommandHeader:
    """The six header bytes that follow the magic."""

    cmd: int
    ret_code: int = 0
    length: int = 0


@dataclass(frozen=True)
class CommandResult:
    """A message read back from the device."""

    header: CommandHeader
    data: bytes = b""

    @property
    def ret_code(self) -> int:
        return self.header.ret_code


def build_header(header: CommandHeader) -> bytes:
    """Encode the magic followed by the header in network byte order."""
    return MAGIC + _HEADER.pack(
        header.cmd & 0xFF, header.ret_code & 0xFF, header.length & 0xFFFFFFFF
    )


def parse_header(data: bytes) -> CommandHeader:
    """Decode the six header bytes that follow the magic."""
    if len(data) < HEADER_SIZE:
        raise ValueError(f"header needs {HEADER_SIZE} bytes, got {len(data)}")
    cmd, ret_code, length = _HEADER.unpack_from(data)
    return CommandHeader(cmd, ret_code, length)


def read_command(sock) -> CommandResult:
    """Read one framed message from ``sock``."""
    magic = readn(sock, len(MAGIC))
    if magic != MAGIC:
        raise PtcError(PtcErrorCode.TRANSFER_FAILED, "bad or missing magic")
    raw = readn(sock, HEADER_SIZE)
    if len(raw) != HEADER_SIZE:
        raise PtcError(PtcErrorCode.TRANSFER_FAILED, "truncated header")
    header = parse_header(raw)
    data = readn(sock, header.length) if header.length else b""
    if len(data) != header.length:
        raise PtcError(PtcErrorCode.TRANSFER_FAILED, "truncated payload")
    return CommandResult(header, data)


def _as_text(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _check(result: CommandResult) -> CommandResult:
    if result.ret_code != 0:
        raise PtcError(result.ret_code, f"device returned code {result.ret_code}")
    return result


class TcpCommandClient:
    """Sends commands to a device, one connection per command."""

    def __init__(self, ip: str, port: int = DEFAULT_PORT) -> None:
        if not ip:
            raise PtcError(PtcErrorCode.BAD_PARAMETER, "device IP is required")
        self.ip = ip
        self.port = port
        self.timeout: float | None = DEFAULT_TIMEOUT
        self._lock = threading.Lock()

    def send_command(self, cmd: int, payload: bytes = b"") -> CommandResult:
        """Send one command and return the device's reply."""
        payload = bytes(payload)
        header = CommandHeader(int(cmd), 0, len(payload))
        with self._lock:
            try:
                sock = tcp_open(self.ip, self.port, self.timeout)
            except (OSError, ValueError) as exc:
                raise PtcError(
                    PtcErrorCode.CONNECT_SERVER_FAILED,
                    f"cannot connect to {self.ip}:{self.port}",
                ) from exc
            with sock:
                try:
                    writen(sock, build_header(header))
                    if payload:
                        writen(sock, payload)
                    return read_command(sock)
                except OSError as exc:
                    raise PtcError(PtcErrorCode.TRANSFER_FAILED, str(exc)) from exc

    def set_calibration(self, content: str | bytes) -> None:
        """Upload calibration content to the device."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        if not content:
            raise PtcError(PtcErrorCode.BAD_PARAMETER, "calibration content is empty")
        _check(self.send_command(PtcCommand.SET_CALIBRATION, content))

    def get_calibration(self) -> str:
        """Fetch the calibration stored on the device."""
        return _as_text(_check(self.send_command(PtcCommand.GET_CALIBRATION)).data)

    def get_lidar_calibration(self) -> str:
        """Fetch the lidar angle correction table."""
        result = self.send_command(PtcCommand.GET_LIDAR_CALIBRATION)
        return _as_text(_check(result).data)

    def reset_calibration(self) -> None:
        """Ask the device to restore its default calibration."""
        _check(self.send_command(PtcCommand.RESET_CALIBRATION))