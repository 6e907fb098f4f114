# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Parsing and resolution of the address a request is sent to

>>> t = Target.from_uri("coaps://gw.local/15001/65536")
>>> t.is_secure, t.host, t.port, t.path
(True, 'gw.local', 5684, '/15001/65536')
>>> t.uri
'coaps://gw.local/15001/65536'
"""

import asyncio
import logging
import socket
import urllib.parse
from collections import namedtuple

from aiocoap.numbers import COAP_PORT, COAPS_PORT
from aiocoap.util import hostportjoin

from .error import MalformedInput

log = logging.getLogger("coap.threadless.target")

_default_ports = {
    "coap": COAP_PORT,
    "coaps": COAPS_PORT,
}


class Target(
    namedtuple("_Target", ("scheme", "host", "port", "path", "query", "address"))
):
    """The parsed form of a ``coap://`` or ``coaps://`` URI

    ``address`` is None until :meth:`resolve` has produced a copy that carries
    the ``(ip, port)`` pair the request is actually sent to."""

    __slots__ = ()

    @classmethod
    def from_uri(cls, uri):
        """Parse a URI, raising :class:`.error.MalformedInput` if it can not
        be used for a request.

        >>> Target.from_uri("http://gw.local/")
        Traceback (most recent call last):
            ...
        threadless.error.MalformedInput: Failed to parse URI: unsupported scheme 'http' (expected coap or coaps)
        """
        if not uri:
            raise MalformedInput("Failed to parse URI: no URI given")

        try:
            parsed = urllib.parse.urlsplit(uri)
            port = parsed.port
        except ValueError as e:
            raise MalformedInput("Failed to parse URI: %s" % e)

        scheme = parsed.scheme.lower()
        if not scheme:
            raise MalformedInput(
                "Failed to parse URI: %r has no scheme (expected coap:// or coaps://)"
                % uri
            )
        if scheme not in _default_ports:
            raise MalformedInput(
                "Failed to parse URI: unsupported scheme %r (expected coap or coaps)"
                % parsed.scheme
            )
        if not parsed.hostname:
            raise MalformedInput("Failed to parse URI: no host in %r" % uri)
        if port == 0:
            raise MalformedInput("Failed to parse URI: port 0 is not usable")

        return cls(
            scheme=scheme,
            host=parsed.hostname,
            port=_default_ports[scheme] if port is None else port,
            path=parsed.path,
            query=parsed.query,
            address=None,
        )

    @property
    def is_secure(self):
        """True if requests go through a DTLS channel"""
        return self.scheme == "coaps"

    @property
    def hostinfo(self):
        return self._hostinfo(self.host, self.port)

    @property
    def uri(self):
        """The target as given, normalized to omit the default port"""
        return self._build_uri(self.hostinfo)

    @property
    def address_hostinfo(self):
        if self.address is None:
            raise ValueError("Target was not resolved yet")
        return self._hostinfo(*self.address)

    @property
    def address_uri(self):
        """The URI with the host replaced by the resolved address"""
        return self._build_uri(self.address_hostinfo)

    def _hostinfo(self, host, port):
        return hostportjoin(host, None if port == _default_ports[self.scheme] else port)

    def _build_uri(self, hostinfo):
        uri = "%s://%s%s" % (self.scheme, hostinfo, self.path)
        if self.query:
            uri += "?" + self.query
        return uri

    async def resolve(self):
        """Return a copy of the target with :attr:`address` set to the first
        address the host name resolves to.

        Raises :class:`.error.MalformedInput` if the host name can not be
        resolved."""
        loop = asyncio.get_running_loop()
        try:
            addrinfo = await loop.getaddrinfo(
                self.host, self.port, type=socket.SOCK_DGRAM
            )
        except socket.gaierror as e:
            raise MalformedInput(
                "Failed to resolve host %s: %s" % (self.host, e.strerror)
            ) from e

        if not addrinfo:
            raise MalformedInput("Failed to resolve host %s" % self.host)

        sockaddr = addrinfo[0][4]
        # A zone can not be expressed in the URI the request is sent to
        if len(sockaddr) == 4 and sockaddr[3]:
            raise MalformedInput(
                "Failed to resolve host %s: %s is only reachable through a"
                " network interface zone, which is not supported"
                % (self.host, sockaddr[0])
            )
        address = sockaddr[:2]
        log.debug("Resolved %s to %s", self.hostinfo, address)
        return self._replace(address=address)
