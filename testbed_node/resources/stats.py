# testbed_node/resources/stats.py
from typing import Callable

import aiocoap

from .base import NodeResource, TEXT_PLAIN


class StatsResource(NodeResource):
    """Reports how many advertisement messages the node has sent."""

    def __init__(self, sent_count: Callable[[], int]):
        super().__init__("stats", "unspecified")
        self.sent_count = sent_count

    async def render_get(self, request):
        return aiocoap.Message(payload=str(self.sent_count()).encode("utf-8"), content_format=TEXT_PLAIN)
