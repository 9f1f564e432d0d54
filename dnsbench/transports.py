"""
DNS transport implementations.

Provides transport classes for plain DNS:
- UDP (standard DNS)
- TCP (DNS over TCP)

Both talk to the target server directly on port 53, so resolution never
goes through the hosts file or the system resolver. Both are fully
cancellable: a cancelled query closes its socket before unwinding.
"""

import asyncio
import struct
import time
from abc import ABC, abstractmethod

import dns.asyncquery
import dns.message

from .models import Transport


DNS_PORT = 53


class BaseTransport(ABC):
    """Base class for DNS transports."""

    transport_type: Transport

    @abstractmethod
    async def query(
        self,
        message: dns.message.Message,
        server_address: str,
        timeout: float,
    ) -> tuple[dns.message.Message, float]:
        """
        Send a DNS query and return the response.

        Returns:
            Tuple of (response, elapsed_ms)
        """
        pass

    async def close(self):
        """Release any pooled resources."""
        pass


class UDPTransport(BaseTransport):
    """Standard DNS over UDP."""

    transport_type = Transport.UDP

    async def query(
        self,
        message: dns.message.Message,
        server_address: str,
        timeout: float,
    ) -> tuple[dns.message.Message, float]:
        """Send DNS query over UDP."""
        start = time.perf_counter_ns()

        response = await dns.asyncquery.udp(
            message,
            server_address,
            timeout=timeout,
            port=DNS_PORT,
        )

        end = time.perf_counter_ns()
        return response, (end - start) / 1_000_000


class TCPTransport(BaseTransport):
    """DNS over TCP."""

    transport_type = Transport.TCP

    async def query(
        self,
        message: dns.message.Message,
        server_address: str,
        timeout: float,
    ) -> tuple[dns.message.Message, float]:
        """Send DNS query over TCP, connection setup included in the timing."""
        start = time.perf_counter_ns()

        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(server_address, DNS_PORT),
            timeout=timeout,
        )

        try:
            # DNS over TCP requires length prefix
            wire = message.to_wire()
            writer.write(struct.pack("!H", len(wire)) + wire)
            await writer.drain()

            length_data = await reader.readexactly(2)
            response_length = struct.unpack("!H", length_data)[0]
            response_data = await reader.readexactly(response_length)

            end = time.perf_counter_ns()
        finally:
            writer.close()
            await writer.wait_closed()

        response = dns.message.from_wire(response_data)
        return response, (end - start) / 1_000_000


def create_transport(transport_type: Transport) -> BaseTransport:
    """
    Create a transport instance for the given type.

    Args:
        transport_type: Type of transport to create

    Returns:
        Appropriate transport instance
    """
    if transport_type == Transport.UDP:
        return UDPTransport()
    elif transport_type == Transport.TCP:
        return TCPTransport()
    else:
        raise ValueError(f"Unknown transport type: {transport_type}")
