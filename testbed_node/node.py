# testbed_node/node.py
import asyncio
import logging
from typing import Dict

import aiocoap
import aiocoap.resource as resource

from .config import NodeConfig
from .discovery import Advertiser, build_service_string
from .resources import LedResource, NodeResource, StatsResource, TemperatureResource

logger = logging.getLogger(__name__)


class CoAPNode:
    """Represents one testbed node serving its resources over CoAP."""

    def __init__(self, config: NodeConfig):
        self.config = config
        self.coap_context = None
        self.client_context = None

        self.advertiser = Advertiser(
            self.config.advertise_uri,
            "",
            interval=self.config.ADVERTISE_INTERVAL,
            timeout=self.config.ADVERTISE_TIMEOUT,
        )

        # Resources that hold state
        self.led = LedResource()
        self.resources: Dict[str, NodeResource] = {"/actuator/led": self.led}
        if self.config.ENABLE_SENSORS:
            self.resources["/sensor/temperature"] = TemperatureResource()
            self.resources["/cli/stats"] = StatsResource(lambda: self.advertiser.sent_count)
        self.advertiser.service_string = build_service_string(self.resources)

    def build_site(self) -> resource.Site:
        root = resource.Site()
        root.add_resource(['.well-known', 'core'], resource.WKCResource(root.get_resources_as_linkheader))
        for path, res in self.resources.items():
            root.add_resource(path.strip('/').split('/'), res)
        return root

    async def start(self):
        """Starts the CoAP server and, if configured, the advertiser."""
        root = self.build_site()

        logger.info(f"Starting CoAP server on [{self.config.COAP_HOST}]:{self.config.COAP_PORT}...")
        self.coap_context = await aiocoap.Context.create_server_context(
            root,
            bind=(self.config.COAP_HOST, self.config.COAP_PORT)
        )
        for path, res in sorted(self.resources.items()):
            logger.info(f"Registered {path} ({res.data_format})")

        if self.config.ADVERTISE_ENABLED:
            self.client_context = await aiocoap.Context.create_client_context()
            await self.advertiser.start(self.client_context)

        logger.info(f"Testbed node '{self.config.NODE_ID}' started successfully.")

    async def run(self):
        """Starts the node and keeps it serving until cancelled."""
        await self.start()
        try:
            await asyncio.get_running_loop().create_future()
        except asyncio.CancelledError:
            logger.info("Testbed node main loop cancelled.")
        finally:
            await self.stop()

    async def stop(self):
        try:
            await self.advertiser.stop()
        finally:
            try:
                if self.client_context:
                    await self.client_context.shutdown()
                    self.client_context = None
            finally:
                if self.coap_context:
                    await self.coap_context.shutdown()
                    self.coap_context = None
                    logger.info("CoAP context shut down.")
