"""
Core DNS query engine.

Executes one timeout-bounded A-record query against one server and
reports either a latency sample or a non-sample outcome.
"""

import asyncio
import logging
from typing import Optional

import dns.exception
import dns.message
import dns.rdatatype

from .models import QueryResult, QueryStatus, Server, Transport
from .transports import BaseTransport, create_transport


logger = logging.getLogger(__name__)


class DNSQueryEngine:
    """
    Timeout-bounded DNS query engine.

    Each query is raced against a wall-clock timer. When the timer wins
    the query coroutine is cancelled, which closes its socket, so an
    unresponsive server never holds the caller past the timeout.
    """

    def __init__(self, transport: Transport = Transport.UDP):
        """
        Initialize the query engine.

        Args:
            transport: Transport protocol used for every query
        """
        self.transport_type = transport
        self._transport: Optional[BaseTransport] = None

    def _get_transport(self) -> BaseTransport:
        """Get or create the transport."""
        if self._transport is None:
            self._transport = create_transport(self.transport_type)
        return self._transport

    @staticmethod
    def _create_query_message(domain: str) -> dns.message.Message:
        """Create an A query with recursion desired."""
        return dns.message.make_query(domain, dns.rdatatype.A)

    @staticmethod
    def _extract_answers(response: dns.message.Message) -> list[str]:
        answers = []
        for rrset in response.answer:
            for rdata in rrset:
                answers.append(str(rdata))
        return answers

    async def execute(
        self,
        server: Server,
        domain: str,
        timeout_ms: int,
    ) -> QueryResult:
        """
        Execute a single DNS query.

        Any response received inside the window counts as a success,
        whatever its rcode. Errors and timeouts are both non-samples.

        Args:
            server: Server to query
            domain: Domain name to resolve
            timeout_ms: Wall-clock bound in milliseconds

        Returns:
            QueryResult with latency on success
        """
        timeout = timeout_ms / 1000
        transport = self._get_transport()

        try:
            # Unparseable names fail here and are recorded like any other error
            message = self._create_query_message(domain)
            response, latency_ms = await asyncio.wait_for(
                transport.query(message, server.address, timeout),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.debug("%s (%s): %s timed out after %dms", server.name, server.address, domain, timeout_ms)
            return QueryResult(
                domain=domain,
                server=server,
                status=QueryStatus.TIMEOUT,
                error_message=f"Query timed out after {timeout_ms}ms",
            )
        except Exception as e:
            # dnspython raises its own Timeout when its internal deadline fires first
            status = QueryStatus.TIMEOUT if isinstance(e, dns.exception.Timeout) else QueryStatus.ERROR
            logger.debug("%s (%s): %s failed: %s", server.name, server.address, domain, e)
            return QueryResult(
                domain=domain,
                server=server,
                status=status,
                error_message=str(e) or type(e).__name__,
            )

        return QueryResult(
            domain=domain,
            server=server,
            status=QueryStatus.SUCCESS,
            latency_ms=latency_ms,
            answers=self._extract_answers(response),
        )

    async def close(self):
        """Close the transport."""
        if self._transport is not None:
            await self._transport.close()
            self._transport = None
