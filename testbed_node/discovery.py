# testbed_node/discovery.py
"""
Self-advertising of the node's resources towards the display node.

The service string lists every resource as ``/path:format`` with a trailing
comma after each entry, e.g. ``/actuator/led:binary,/cli/stats:unspecified,``.
"""
import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import aiocoap

from .resources.base import NodeResource, TEXT_PLAIN

logger = logging.getLogger(__name__)


def build_service_string(resources: Dict[str, NodeResource]) -> str:
    """Builds the advertising string from a ``{"/path": resource}`` mapping."""
    return "".join(f"{path}:{res.data_format}," for path, res in sorted(resources.items()))


def parse_service_string(text: str) -> List[Tuple[str, str]]:
    entries = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        path, sep, data_format = entry.rpartition(":")
        if not sep or not path:
            raise ValueError(f"malformed service entry: {entry!r}")
        entries.append((path, data_format))
    return entries


class Advertiser:
    """Periodically POSTs the service string to the display node."""

    def __init__(self, uri: str, service_string: str, interval: float = 10.0, timeout: float = 2.0):
        self.uri = uri
        self.service_string = service_string
        self.interval = interval
        self.timeout = timeout
        self.sent_count = 0
        self.context: Optional[aiocoap.Context] = None
        self._task: Optional[asyncio.Task] = None

    async def advertise_once(self):
        """Sends one advertisement, raises on transport errors."""
        message = aiocoap.Message(code=aiocoap.POST, mtype=aiocoap.NON, uri=self.uri,
                                  payload=self.service_string.encode("utf-8"),
                                  content_format=TEXT_PLAIN)
        pending = self.context.request(message)
        try:
            response = await asyncio.wait_for(pending.response, timeout=self.timeout)
        except asyncio.TimeoutError:
            # NON requests to a group usually stay unanswered
            logger.debug(f"No answer to advertisement sent to {self.uri}")
        else:
            logger.debug(f"Advertisement acknowledged with {response.code}")
        self.sent_count += 1

    async def run(self):
        while True:
            logger.info("Advertising")
            try:
                await self.advertise_once()
            except (aiocoap.error.Error, OSError) as e:
                logger.warning(f"Advertising message send failed: {e}, re-advertising in {self.interval}s")
            except Exception as e:
                logger.error(f"Advertising stopped after unexpected error: {e}", exc_info=True)
                return
            await asyncio.sleep(self.interval)

    async def start(self, context: aiocoap.Context):
        self.context = context
        logger.info(f"Advertising '{self.service_string}' to {self.uri} every {self.interval}s")
        self._task = asyncio.create_task(self.run())

    async def stop(self):
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
