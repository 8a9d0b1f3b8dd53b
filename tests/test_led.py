# tests/test_led.py
import unittest

import aiocoap
import pytest

from testbed_node.resources.led import LedResource, parse_command

from .coap_helpers import incoming


def put(payload: bytes) -> aiocoap.Message:
    return incoming(aiocoap.PUT, payload)


class TestLedResource(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.led = LedResource()

    async def test_initial_state_is_off(self):
        """A fresh LED reports off on GET."""
        response = await self.led.render(incoming(aiocoap.GET))
        self.assertEqual(response.code, aiocoap.Code.CONTENT)
        self.assertEqual(response.payload, b"off")

    async def test_put_on_then_get(self):
        """PUT on switches the LED and GET reports the new state."""
        response = await self.led.render(put(b"on"))
        self.assertEqual(response.code, aiocoap.Code.CHANGED)
        self.assertEqual(response.payload, b"on")

        response = await self.led.render(incoming(aiocoap.GET))
        self.assertEqual(response.payload, b"on")

    async def test_get_does_not_change_state(self):
        await self.led.render(put(b"on"))
        for _ in range(3):
            response = await self.led.render(incoming(aiocoap.GET))
            self.assertEqual(response.payload, b"on")
        self.assertEqual(self.led.status, "on")

    async def test_put_off(self):
        await self.led.render(put(b"on"))
        response = await self.led.render(put(b"off"))
        self.assertEqual(response.code, aiocoap.Code.CHANGED)
        self.assertEqual(self.led.status, "off")

    async def test_every_write_is_logged(self):
        """One log line per accepted write, repeated values included."""
        with self.assertLogs("testbed_node.resources.led", level="INFO") as logs:
            await self.led.render(put(b"on"))
            await self.led.render(put(b"on"))
            await self.led.render(put(b"off"))
        self.assertEqual(len(logs.records), 3)
        self.assertIn("LED ON", logs.output[0])
        self.assertIn("LED ON", logs.output[1])
        self.assertIn("LED OFF", logs.output[2])

    async def test_unknown_command_keeps_state(self):
        await self.led.render(put(b"on"))
        with self.assertLogs("testbed_node.resources.led", level="WARNING") as logs:
            response = await self.led.render(put(b"blink"))
        self.assertEqual(response.code, aiocoap.Code.BAD_REQUEST)
        self.assertEqual(self.led.status, "on")
        self.assertEqual(logs.records[0].getMessage(), "Unknown command: blink")

    async def test_bad_request_names_the_command(self):
        response = await self.led.render(put(b"blink"))
        self.assertEqual(response.code, aiocoap.Code.BAD_REQUEST)
        self.assertIn(b"blink", response.payload)
        self.assertIn(b"'on' or 'off'", response.payload)

    async def test_empty_and_binary_payloads_are_rejected(self):
        for payload in (b"", b"\xff\xfe"):
            response = await self.led.render(put(payload))
            self.assertEqual(response.code, aiocoap.Code.BAD_REQUEST)
        self.assertEqual(self.led.status, "off")

    async def test_post_is_not_allowed(self):
        with self.assertRaises(aiocoap.error.UnallowedMethod):
            await self.led.render(incoming(aiocoap.POST, b"on"))


@pytest.mark.parametrize("payload, expected", [
    (b"on", "on"),
    (b"off", "off"),
    (b" ON\n", "on"),
    (b"Off", "off"),
    (b"1", "on"),
    (b"0", "off"),
    (b"2", None),
    (b"", None),
    (b"\xc3\x28", None),
])
def test_parse_command(payload, expected):
    assert parse_command(payload) == expected


def test_invalid_initial_status():
    with pytest.raises(ValueError):
        LedResource(initial_status="dim")


def test_led_metadata():
    led = LedResource()
    assert led.name == "led"
    assert led.data_format == "binary"
    # Exposed in /.well-known/core
    assert led.get_link_description()["rt"] == "binary"
