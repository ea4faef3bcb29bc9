"""
DNS Server Core

This module implements the UDP listener:
- asyncio.DatagramProtocol transport bound to the configured address
- One datagram processed at a time (decode, resolve, encode, reply)
- Per-request failure isolation: a request that fails is dropped silently
"""

import asyncio
import logging
from enum import Enum
from typing import Optional, Tuple

from .message import MessageBuffer, encode_response
from .resolver import ZoneResolver
from .zone import ZoneStore

logger = logging.getLogger(__name__)


class ListenerState(Enum):
    """Listener loop states"""

    IDLE = "idle"
    PROCESSING = "processing"


class DNSUDPProtocol(asyncio.DatagramProtocol):
    """UDP protocol handler for DNS queries"""

    def __init__(self, server: "DNSServer"):
        self.server = server
        self.transport = None

    def connection_made(self, transport):
        """Called when UDP socket is ready"""
        self.transport = transport
        logger.info(
            f"DNS UDP server listening on {transport.get_extra_info('sockname')}"
        )

    def datagram_received(self, data: bytes, addr: Tuple[str, int]):
        """Answer a query before the next datagram is read"""
        response = self.server.handle_datagram(data, addr)
        if response:
            self.transport.sendto(response, addr)

    def error_received(self, exc):
        """Receive errors only mean there is no data this cycle"""
        logger.debug(f"DNS UDP receive error: {exc}")


class DNSServer:
    """Authoritative DNS server answering from a zone directory"""

    def __init__(
        self,
        config,
        resolver: Optional[ZoneResolver] = None,
        request_logger=None,
    ):
        self.config = config
        if resolver is None:
            zone_store = ZoneStore(
                config.zone.root_path,
                default_ttl=config.zone.default_ttl,
                ttl_suffix=config.zone.ttl_suffix,
            )
            resolver = ZoneResolver(zone_store)
        self.resolver = resolver
        self.request_logger = request_logger

        # Response arena, reset for every datagram
        self.buffer = MessageBuffer(config.server.buffer_size)

        self._state = ListenerState.IDLE
        self._transport = None

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._transport is not None

    @property
    def sockname(self) -> Optional[Tuple[str, int]]:
        """Address the UDP socket is bound to"""
        if self._transport is None:
            return None
        return self._transport.get_extra_info("sockname")

    def handle_datagram(
        self, data: bytes, client: Optional[Tuple[str, int]] = None
    ) -> Optional[bytes]:
        """Process one datagram and return the response to send, if any.

        Every failure is trapped here: malformed queries, encoding failures
        and unexpected errors all result in no response.
        """
        if not data:
            return None

        if len(data) > self.buffer.capacity:
            logger.debug(
                f"Ignoring oversized datagram from {client}: {len(data)} bytes"
            )
            return None

        self._state = ListenerState.PROCESSING
        started = 0.0
        if self.request_logger:
            started = self.request_logger.start_request()

        try:
            header, questions, answers = self.resolver.answer_query(data)
            response = encode_response(self.buffer, header, questions, answers)
        except Exception as e:
            logger.debug(f"Dropping request from {client}: {e}")
            if self.request_logger:
                self.request_logger.log_request(
                    client, started, [], [], answered=False, error=str(e)
                )
            return None
        finally:
            self._state = ListenerState.IDLE

        if self.request_logger:
            self.request_logger.log_request(
                client, started, questions, answers, answered=True
            )
        return response

    async def start(self) -> None:
        """Bind the UDP socket and start answering queries"""
        if self.is_running:
            logger.warning("Server is already running")
            return

        bind_address = self.config.server.bind_address
        dns_port = self.config.server.dns_port

        loop = asyncio.get_running_loop()
        transport, _ = await loop.create_datagram_endpoint(
            lambda: DNSUDPProtocol(self), local_addr=(bind_address, dns_port)
        )
        self._transport = transport
        logger.info(
            f"DNS server started on {bind_address}:{dns_port} "
            f"serving {self.resolver.zone_store.root}"
        )

    async def stop(self) -> None:
        """Close the UDP socket"""
        if not self.is_running:
            return

        self._transport.close()
        self._transport = None
        logger.info("DNS server stopped")
