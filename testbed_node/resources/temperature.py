# testbed_node/resources/temperature.py
import logging
import random

import aiocoap

from .base import NodeResource, TEXT_PLAIN

logger = logging.getLogger(__name__)


class TemperatureResource(NodeResource):
    def __init__(self):
        super().__init__("temperature", "number")
        self.temperature = self.generate_temperature()

    def generate_temperature(self):
        base = random.uniform(20, 25)
        if random.random() < 0.05:
            base = random.uniform(30, 40)
        return int(round(base))

    async def render_get(self, request):
        self.temperature = self.generate_temperature()
        logger.debug(f"GET /sensor/temperature -> {self.temperature}")
        return aiocoap.Message(payload=str(self.temperature).encode("utf-8"), content_format=TEXT_PLAIN)
