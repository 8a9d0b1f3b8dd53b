# testbed_node/resources/led.py
import logging

import aiocoap

from .base import NodeResource, TEXT_PLAIN

logger = logging.getLogger(__name__)

# Accepted PUT bodies; "1"/"0" are what the other testbed nodes send
COMMANDS = {
    "on": "on",
    "1": "on",
    "off": "off",
    "0": "off",
}


def parse_command(payload: bytes):
    """Map a PUT body to "on"/"off", or None if it is not a known command."""
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return COMMANDS.get(text.strip().lower())


class LedResource(NodeResource):
    """Simulated LED actuator: GET reports the state, PUT switches it."""

    def __init__(self, initial_status: str = "off"):
        super().__init__("led", "binary")
        if initial_status not in ("on", "off"):
            raise ValueError(f"invalid LED status: {initial_status!r}")
        self.status = initial_status

    async def render_get(self, request):
        return aiocoap.Message(code=aiocoap.Code.CONTENT, payload=self.status.encode("utf-8"),
                               content_format=TEXT_PLAIN)

    async def render_put(self, request):
        command = parse_command(request.payload)
        if command is None:
            raw = request.payload.decode("utf-8", errors="replace")
            logger.warning(f"Unknown command: {raw}")
            payload = f"Invalid command {raw!r}. Use 'on' or 'off'".encode("utf-8")
            return aiocoap.Message(code=aiocoap.Code.BAD_REQUEST, payload=payload,
                                   content_format=TEXT_PLAIN)

        self.status = command
        logger.info(f"LED {command.upper()}")
        return aiocoap.Message(code=aiocoap.Code.CHANGED, payload=self.status.encode("utf-8"),
                               content_format=TEXT_PLAIN)
