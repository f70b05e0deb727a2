"""
Stdio transport for the PDQ MCP server.

One JSON-RPC message per line on stdin, one response per line on stdout.
Logs go to stderr so they never corrupt the message stream.
"""

import asyncio
import json
import logging
import signal
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pdq.server import DirectoryMCPServer

logger = logging.getLogger(__name__)

# readline() fails on lines above the reader limit; tool calls carrying
# hundreds of ids need more than asyncio's 64 KiB default
MAX_LINE_BYTES = 16 * 1024 * 1024


def parse_line(line: bytes) -> dict[str, Any] | None:
    """
    Decode one line into a JSON-RPC message.

    Blank lines and lines that are not a JSON object yield None.
    """
    if not line.strip():
        return None

    try:
        message = json.loads(line)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Dropping unparseable line: {e}")
        return None

    if not isinstance(message, dict):
        logger.error("Dropping non-object JSON-RPC message")
        return None
    return message


class StdioTransport:
    """
    Line-oriented stdin/stdout transport.

    Messages are dispatched as concurrent tasks; responses are written in
    completion order. On EOF the transport waits for in-flight calls.
    """

    def __init__(self, server: "DirectoryMCPServer") -> None:
        self.server = server
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._write_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[None]] = set()
        self._read_task: asyncio.Task[None] | None = None
        self._stopping = False

    async def _open(self) -> None:
        loop = asyncio.get_running_loop()

        reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)

        write_transport, write_protocol = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin, sys.stdout
        )
        self._reader = reader
        self._writer = asyncio.StreamWriter(write_transport, write_protocol, None, loop)

    async def serve(self) -> None:
        """Open stdin/stdout, then read and dispatch until EOF or stop()."""
        await self._open()
        assert self._reader is not None

        logger.info("Listening on stdio")
        await self.run(self._reader)

    async def run(self, reader: asyncio.StreamReader) -> None:
        """
        Dispatch messages from `reader` until EOF or stop().

        Waits for in-flight calls before returning.
        """
        self._read_task = asyncio.create_task(self._read_messages(reader))
        try:
            await self._read_task
        except asyncio.CancelledError:
            if not self._stopping:
                raise
            logger.info("Stopped reading stdin")

        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _read_messages(self, reader: asyncio.StreamReader) -> None:
        while not self._stopping:
            try:
                line = await reader.readline()
            except ValueError as e:
                # line above MAX_LINE_BYTES; the reader has discarded it
                logger.error(f"Dropping oversized message: {e}")
                continue

            if not line:
                logger.info("stdin closed")
                break

            message = parse_line(line)
            if message is None:
                continue

            task = asyncio.create_task(self._dispatch(message))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def stop(self) -> None:
        """Stop reading and close stdout."""
        self._stopping = True
        if self._read_task is not None and not self._read_task.done():
            # readline() does not return on its own until stdin has data
            self._read_task.cancel()

        writer, self._writer = self._writer, None
        if writer is not None:
            writer.close()
            try:
                await writer.wait_closed()
            except (BrokenPipeError, ConnectionResetError):
                pass

    async def _dispatch(self, message: dict[str, Any]) -> None:
        try:
            response = await self.server.handle_message(message)
        except Exception as e:
            logger.exception(f"Unhandled error for message {message.get('id')}: {e}")
            if "id" not in message:
                return
            response = {
                "jsonrpc": "2.0",
                "id": message["id"],
                "error": {"code": -32603, "message": f"Internal error: {e}"},
            }

        if response is not None:
            await self._write(response)

    async def _write(self, response: dict[str, Any]) -> None:
        if self._writer is None:
            logger.warning(f"stdout closed; dropping response {response.get('id')}")
            return

        async with self._write_lock:
            self._writer.write(json.dumps(response).encode("utf-8") + b"\n")
            await self._writer.drain()


async def run_stdio_server(server: "DirectoryMCPServer") -> None:
    """Run the server over stdio until EOF, SIGINT or SIGTERM."""
    transport = StdioTransport(server)
    loop = asyncio.get_running_loop()

    def on_signal() -> None:
        logger.info("Shutdown signal received")
        asyncio.create_task(transport.stop())

    try:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, on_signal)
    except NotImplementedError:
        # no add_signal_handler on Windows event loops
        pass

    try:
        await transport.serve()
    finally:
        await transport.stop()
