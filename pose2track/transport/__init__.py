"""Outbound datagram transport."""

from .udp_sender import UdpPoseSender

__all__ = ["UdpPoseSender"]
