# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

import unittest

import aiocoap
from aiocoap.numbers import ContentFormat

from threadless.defaults import color_missing_modules
from threadless.error import MalformedResponse
from threadless.exchange import Response
from threadless.present import describe, hexdump, message_to_text, present


def response(payload, content_format=None, code=aiocoap.CONTENT):
    return Response(
        code=code,
        content_format=content_format,
        payload=payload,
        rtt=0.0123,
        remote_uri="coaps://192.0.2.1/15001",
        message=None,
    )


class TestPresent(unittest.TestCase):
    def test_linkformat(self):
        payload = b'</15001/0>;rt="light"'
        self.assertEqual(
            present(response(payload, ContentFormat.LINKFORMAT)),
            'Discovered resources:\n</15001/0>;rt="light"',
        )

    def test_linkformat_is_not_parsed(self):
        # not valid link-format, shown anyway
        self.assertEqual(
            present(response(b"<>,,", ContentFormat.LINKFORMAT)),
            "Discovered resources:\n<>,,",
        )

    def test_json(self):
        self.assertEqual(
            present(response(b'{"9003":65536,"9002":1}', ContentFormat.JSON)),
            'JSON payload:\n{\n    "9003": 65536,\n    "9002": 1\n}',
        )

    def test_json_invalid(self):
        with self.assertRaises(MalformedResponse):
            present(response(b'{"9003":', ContentFormat.JSON))

    def test_unknown_known(self):
        text = present(response(b"hello", ContentFormat.TEXT))
        self.assertEqual(text, "Unknown content format: 0 (text/plain; charset=utf-8)\nhello")

    def test_unknown_unregistered(self):
        text = present(response(b"hello", ContentFormat(12345)))
        self.assertEqual(text, "Unknown content format: 12345\nhello")

    def test_unspecified(self):
        text = present(response(b"hello"))
        self.assertEqual(text, "Unknown content format: unspecified\nhello")

    def test_unknown_binary(self):
        text = present(response(b"\x00\xff", ContentFormat.OCTETSTREAM))
        self.assertEqual(
            text.splitlines()[0], "Unknown content format: 42 (application/octet-stream)"
        )
        self.assertIn("00 ff", text)

    def test_unknown_empty(self):
        self.assertEqual(
            present(response(b"", ContentFormat.CBOR)),
            "Unknown content format: 60 (application/cbor)\nNo payload",
        )

    def test_unknown_never_fails(self):
        for number in [0, 40 + 1, 11050, 65000, 65535]:
            for payload in [b"", b"\xc3", b"text", bytes(range(256))]:
                with self.subTest(number=number, payload=payload):
                    text = present(response(payload, ContentFormat(number)))
                    self.assertIn(str(number), text.splitlines()[0])

    @unittest.skipIf(
        color_missing_modules(),
        "Modules missing for color output: %s" % (color_missing_modules(),),
    )
    def test_json_colored(self):
        text = present(
            response(b'{"9003":65536,"9002":1}', ContentFormat.JSON), color=True
        )
        self.assertTrue(text.startswith("JSON payload:\n"))
        self.assertIn("\x1b[", text)
        self.assertIn("65536", text)


class TestDescribe(unittest.TestCase):
    def test_lines(self):
        lines = list(describe(response(b"{}", ContentFormat.JSON)))
        self.assertEqual(
            lines,
            [
                "2.05 Content from coaps://192.0.2.1/15001",
                "Content format: application/json (50)",
                "Round-trip time: 12.3 ms",
            ],
        )

    def test_unspecified(self):
        lines = list(describe(response(b"")))
        self.assertEqual(lines[1], "Content format: unspecified")


class TestMessageToText(unittest.TestCase):
    def test_request(self):
        m = aiocoap.Message(
            code=aiocoap.GET,
            uri="coap://192.0.2.1/15001",
            content_format=ContentFormat.TEXT,
            payload=b"x" * 20,
        )
        lines = list(message_to_text(m, "to"))
        self.assertTrue(lines[0].startswith("GET to "))
        self.assertIn("  option URI_PATH (11): '15001'", lines)
        self.assertEqual(lines[-1], "  payload " + "78" * 16 + "... (20 bytes)")

    def test_no_payload(self):
        m = aiocoap.Message(code=aiocoap.CONTENT)
        self.assertEqual(list(message_to_text(m, "from"))[-1], "  no payload")


class TestHexdump(unittest.TestCase):
    def test_full_lines(self):
        dump = hexdump(bytes(range(32)))
        self.assertEqual(len(dump.splitlines()), 2)
        self.assertTrue(dump.startswith("00000000  00 01 02 03"))
        self.assertTrue(dump.splitlines()[1].startswith("00000010  10 11"))
