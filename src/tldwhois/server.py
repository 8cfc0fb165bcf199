"""
TCP WHOIS server.

One task is spawned per accepted connection. Each connection carries exactly
one query: the handler reads once, answers, and closes.
"""

from enum import Enum
from typing import Any, Optional

import anyio
import structlog
from anyio.abc import SocketAttribute, SocketListener, SocketStream, TaskGroup, TaskStatus

from .config import Config
from .exceptions import RegistryError
from .services.registry_service import RegistryClient
from .services.response_service import ResponseComposer
from .utils.validators import DomainValidator

logger = structlog.get_logger(__name__)

HELP_COMMAND = "help"

# Pause after a failed accept so descriptor exhaustion does not spin the loop
ACCEPT_RETRY_DELAY = 0.1


class ConnectionState(str, Enum):
    """Lifecycle of a single client connection."""

    READING = "reading"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    RESPONDING = "responding"
    CLOSED = "closed"


def _format_peer(address: Any) -> str:
    if isinstance(address, tuple) and len(address) >= 2:
        return f"{address[0]}:{address[1]}"
    return str(address)


class ConnectionHandler:
    """Owns one client connection's read/validate/respond/close sequence."""

    def __init__(
        self,
        stream: SocketStream,
        config: Config,
        validator: DomainValidator,
        composer: ResponseComposer,
        registry: RegistryClient,
    ):
        self.stream = stream
        self.config = config
        self.validator = validator
        self.composer = composer
        self.registry = registry
        self.state = ConnectionState.READING
        self.peer = _format_peer(stream.extra(SocketAttribute.remote_address, None))
        self.log = logger.bind(peer=self.peer)

    async def run(self) -> None:
        """Serve the connection and close it."""
        try:
            async with self.stream:
                query = await self._read_query()
                if query is None:
                    return
                chunks = await self.respond(query)
                self.state = ConnectionState.RESPONDING
                await self._write(chunks)
        finally:
            self.state = ConnectionState.CLOSED

    async def _read_query(self) -> Optional[str]:
        try:
            with anyio.fail_after(self.config.read_timeout):
                data = await self.stream.receive(self.config.max_request_length)
        except TimeoutError:
            self.log.warning("Read timed out", timeout=self.config.read_timeout)
            return None
        except anyio.EndOfStream:
            self.log.warning("Connection closed before a query was received")
            return None
        except (anyio.BrokenResourceError, anyio.ClosedResourceError, OSError) as e:
            self.log.warning("Read failed", error=str(e))
            return None

        if not data:
            self.log.warning("Empty read")
            return None

        return data.decode("utf-8", errors="replace").strip()

    async def respond(self, query: str) -> list[bytes]:
        """Build the reply chunks for a trimmed query."""
        self.state = ConnectionState.VALIDATING
        if query == HELP_COMMAND:
            self.log.debug("Help requested")
            return self.composer.help()

        outcome = self.validator.validate(query)
        self.log.debug("Query classified", query=query, status=outcome.status.value)
        if not outcome.is_valid:
            return self.composer.error(outcome)

        self.state = ConnectionState.RESOLVING
        try:
            with anyio.fail_after(self.config.registry_timeout):
                record = await self.registry.lookup(outcome.domain)
        except TimeoutError:
            self.log.error(
                "Registry lookup timed out",
                domain=outcome.domain,
                timeout=self.config.registry_timeout,
            )
            return self.composer.server_failure()
        except RegistryError as e:
            self.log.error(
                "Registry lookup failed", domain=outcome.domain, error=e.to_dict()
            )
            return self.composer.server_failure()

        if record is None:
            self.log.info("No match", domain=outcome.domain)
        return self.composer.compose(outcome, record)

    async def _write(self, chunks: list[bytes]) -> None:
        try:
            for chunk in chunks:
                await self.stream.send(chunk)
        except (anyio.BrokenResourceError, anyio.ClosedResourceError, OSError) as e:
            self.log.warning("Write failed", error=str(e))


class WhoisServer:
    """Accepts TCP connections and hands each one to a new handler."""

    def __init__(
        self,
        config: Config,
        registry: RegistryClient,
        validator: Optional[DomainValidator] = None,
        composer: Optional[ResponseComposer] = None,
    ):
        self.config = config
        self.registry = registry
        self.validator = validator or DomainValidator(config)
        self.composer = composer or ResponseComposer(config)

    async def _handle(self, stream: SocketStream) -> None:
        handler = ConnectionHandler(
            stream, self.config, self.validator, self.composer, self.registry
        )
        try:
            await handler.run()
        except Exception as e:
            # A failing connection must not take the listener down with it
            logger.error(
                "Connection handler crashed",
                peer=handler.peer,
                state=handler.state.value,
                error=str(e),
                exc_info=True,
            )

    async def _accept_loop(self, listener: SocketListener, tg: TaskGroup) -> None:
        while True:
            try:
                stream = await listener.accept()
            except anyio.ClosedResourceError:
                logger.info("Listener closed")
                return
            except (OSError, anyio.BrokenResourceError) as e:
                logger.warning("Accept failed", error=str(e))
                await anyio.sleep(ACCEPT_RETRY_DELAY)
                continue
            tg.start_soon(self._handle, stream)

    async def serve(
        self, *, task_status: TaskStatus[int] = anyio.TASK_STATUS_IGNORED
    ) -> None:
        """Bind the listener and serve until cancelled.

        Raises ``OSError`` if the address cannot be bound. Reports the bound
        port through ``task_status`` so callers can bind to port 0.
        """
        listener = await anyio.create_tcp_listener(
            local_host=self.config.bind_host, local_port=self.config.bind_port
        )
        port = listener.extra(SocketAttribute.local_port)
        logger.info(
            "WHOIS server listening", host=self.config.bind_host, port=port
        )

        async with listener, anyio.create_task_group() as tg:
            for sub_listener in listener.listeners:
                tg.start_soon(self._accept_loop, sub_listener, tg)
            task_status.started(port)

    async def run(self) -> None:
        """Check the registry, then serve until cancelled."""
        await self.registry.check()
        try:
            await self.serve()
        finally:
            with anyio.CancelScope(shield=True):
                await self.registry.close()
