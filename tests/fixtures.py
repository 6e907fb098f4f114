# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Test fixtures that are not test specific: a stand-in for a gateway that
runs in the test's event loop, and a fake client context for exercising
failure paths that a loopback server can not produce"""

import asyncio
import os
import unittest
from unittest import mock

import aiocoap
import aiocoap.resource
from aiocoap.credentials import CredentialsMap
from aiocoap.numbers import ContentFormat

from threadless.credentials import Credential
from threadless.exchange import exchange
from threadless.request import build_request
from threadless.target import Target

# time granted to asyncio to receive datagrams sent via loopback, and to close
# connections
CLEANUPTIME = 0.01

LINKS = b'</15001/0>;rt="light"'
LIGHT = b'{"9003":65536,"9002":1}'


class StaticResource(aiocoap.resource.Resource):
    def __init__(self, payload, content_format=None):
        super().__init__()
        self.payload = payload
        self.content_format = content_format

    async def render_get(self, request):
        response = aiocoap.Message(payload=self.payload)
        if self.content_format is not None:
            response.opt.content_format = self.content_format
        return response


class SlowResource(aiocoap.resource.Resource):
    delay = 5

    async def render_get(self, request):
        await asyncio.sleep(self.delay)
        return aiocoap.Message(payload=b"too late")


class GatewaySite(aiocoap.resource.Site):
    """A few resources shaped like those of a Trådfri gateway"""

    def __init__(self):
        super().__init__()

        self.add_resource(["15001"], StaticResource(LINKS, ContentFormat.LINKFORMAT))
        self.add_resource(["15001", "65536"], StaticResource(LIGHT, ContentFormat.JSON))
        self.add_resource(["broken"], StaticResource(b'{"9003":', ContentFormat.JSON))
        self.add_resource(
            ["octets"], StaticResource(b"\x00\xff\x01", ContentFormat.OCTETSTREAM)
        )
        self.add_resource(["untyped"], StaticResource(b"hello"))
        self.add_resource(["slow"], SlowResource())


class WithGatewayServer(unittest.IsolatedAsyncioTestCase):
    serveraddress = os.environ.get("THREADLESS_TEST_ADDRESS", "127.0.0.1")
    serverport = 56830

    @property
    def servernetloc(self):
        return "%s:%d" % (self.serveraddress, self.serverport)

    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.server = await aiocoap.Context.create_server_context(
            GatewaySite(), bind=(self.serveraddress, self.serverport)
        )

    async def asyncTearDown(self):
        # let the server receive the acks that were just sent
        await asyncio.sleep(CLEANUPTIME)
        await self.server.shutdown()
        await super().asyncTearDown()


class _PendingRequest:
    def __init__(self, response):
        self.response = response


class FakeContext:
    """Stand-in for an aiocoap client context whose requests fail with a given
    exception, or never complete if it is None

    It records what threadless does with it: the credentials it was given,
    the requests it was asked to send, and whether it was shut down."""

    def __init__(self, exception=None):
        self.exception = exception
        self.client_credentials = CredentialsMap()
        self.requests = []
        self.shut_down = False

    def request(self, request):
        self.requests.append(request)
        response = asyncio.get_running_loop().create_future()
        if self.exception is not None:
            response.set_exception(self.exception)
        return _PendingRequest(response)

    async def shutdown(self):
        self.shut_down = True


class WithFakeContext(unittest.IsolatedAsyncioTestCase):
    """Runs code that creates client contexts against :class:`FakeContext`
    instances, with DTLS support assumed present"""

    def setUp(self):
        super().setUp()
        self.contexts = []
        patches = [
            mock.patch.object(
                aiocoap.Context, "create_client_context", side_effect=self._create
            ),
            mock.patch("threadless.exchange.dtls_missing_modules", return_value=[]),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    # what the next created context's requests fail with
    next_exception = None

    async def _create(self, *args, **kwargs):
        context = FakeContext(self.next_exception)
        self.contexts.append(context)
        return context

    async def run_exchange(self, uri, key=b"mykey123", address=None, timeout=1):
        target = Target.from_uri(uri)
        target = target._replace(address=address or (target.host, target.port))
        credentials = Credential(key).bind(target)
        return await exchange(
            build_request(target), credentials=credentials, timeout=timeout
        )
