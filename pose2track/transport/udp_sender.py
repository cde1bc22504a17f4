"""Fire-and-forget UDP sender for encoded tracking packets."""

from __future__ import annotations

import logging
import socket
import time

logger = logging.getLogger(__name__)


class UdpPoseSender:
    """Sends each packet as one datagram to a fixed (host, port).

    No retries and no acknowledgement. A failed send is counted and the next
    frame goes out independently.
    """

    def __init__(self, host: str, port: int, warn_interval_s: float = 2.0):
        self.host = str(host)
        self.port = int(port)
        self.addr = (self.host, self.port)
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.setblocking(False)

        self.sent = 0
        self.dropped = 0
        self._warn_interval_s = float(warn_interval_s)
        self._last_warn_t = 0.0
        self._closed = False

        logger.info("[UDP] sending tracking packets to %s:%s", self.host, self.port)

    def send(self, data: bytes) -> bool:
        if self._closed:
            self.dropped += 1
            return False
        try:
            self.sock.sendto(data, self.addr)
        except OSError as exc:
            # Includes BlockingIOError when the kernel buffer is full.
            self.dropped += 1
            now = time.time()
            if (now - self._last_warn_t) > self._warn_interval_s:
                logger.warning(
                    "[UDP] send to %s:%s failed (%s); dropped=%d",
                    self.host,
                    self.port,
                    exc,
                    self.dropped,
                )
                self._last_warn_t = now
            return False
        self.sent += 1
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.sock.close()
        except OSError:
            pass
