# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""The one request/response exchange of a run

:func:`exchange` creates an aiocoap client context that only knows the
credentials it is given, sends the request, and waits a bounded time for the
response. Whatever happens, the context (and with it any DTLS session and
socket) is shut down before the function returns or raises.

Results are expressed as follows:

* a response arrives: a :class:`Response` is returned,
* no response within the time limit: :class:`.error.Timeout` is raised,
* handshake failure, unreachable peer and other network trouble:
  :class:`.error.TransportError` is raised,
* the task gets cancelled: the cancellation propagates after cleanup.
"""

import asyncio
import errno
import logging
import time
import urllib.parse
from collections import namedtuple

import aiocoap
import aiocoap.error
from aiocoap.credentials import CredentialsMissingError

from .defaults import dtls_missing_modules, get_default_timeout
from .error import Timeout, TransportError
from .present import message_to_text

log = logging.getLogger("coap.threadless.exchange")

# Errors for which aiocoap has its own explanations; anything else on a DTLS
# connection is most likely the handshake going wrong
_network_errnos = (
    errno.ECONNREFUSED,
    errno.ECONNRESET,
    errno.EHOSTUNREACH,
    errno.ENETUNREACH,
    errno.EACCES,
)


class Response(
    namedtuple(
        "_Response",
        ("code", "content_format", "payload", "rtt", "remote_uri", "message"),
    )
):
    """What came back from the peer

    ``rtt`` is the time in seconds between handing the request to aiocoap and
    the arrival of the response, and ``message`` is the original
    :class:`aiocoap.Message`."""

    __slots__ = ()

    @classmethod
    def from_message(cls, message, rtt):
        return cls(
            code=message.code,
            content_format=message.opt.content_format,
            payload=message.payload,
            rtt=rtt,
            remote_uri=message.get_request_uri(),
            message=message,
        )


def _describe(e):
    # aiocoap's own errors only name their class; the reason is in the cause
    cause = e.__cause__
    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    if cause is not None and str(cause):
        return str(cause)
    return str(e) or repr(e)


def _transport_error(e, secure):
    cause = e.__cause__ if e.__cause__ is not None else e
    if (
        secure
        and isinstance(e, aiocoap.error.Error)
        and getattr(cause, "errno", None) not in _network_errnos
    ):
        message = "DTLS handshake failed: %s" % _describe(e)
    else:
        message = "Failed to execute request: %s" % _describe(e)
    return TransportError(message)


async def exchange(request, *, credentials=None, timeout=None):
    """Send a single request and return the :class:`Response`.

    ``credentials`` is loaded into the client credentials of a fresh context;
    it is typically produced by :meth:`.credentials.Credential.bind`.
    ``timeout`` is given in seconds and defaults to
    :func:`.defaults.get_default_timeout`."""
    if timeout is None:
        timeout = get_default_timeout()

    secure = urllib.parse.urlsplit(request.get_request_uri()).scheme == "coaps"
    if secure:
        missing = dtls_missing_modules()
        if missing:
            raise TransportError(
                "coaps:// requires the following additional module(s) to be"
                " installed: %s" % ", ".join(missing)
            )

    try:
        context = await aiocoap.Context.create_client_context()
    except (OSError, aiocoap.error.Error) as e:
        raise TransportError("Failed to set up CoAP: %s" % _describe(e)) from e

    try:
        if credentials:
            context.client_credentials.load_from_dict(credentials)

        log.info("Sending request:")
        for line in message_to_text(request, "to"):
            log.info(line)

        started = time.monotonic()
        try:
            message = await asyncio.wait_for(
                context.request(request).response, timeout
            )
        except (asyncio.TimeoutError, aiocoap.error.TimeoutError) as e:
            log.debug("No response after %s seconds", timeout)
            raise Timeout() from e
        except (aiocoap.error.Error, CredentialsMissingError, OSError) as e:
            raise _transport_error(e, secure) from e
        rtt = time.monotonic() - started

        log.info("Received response:")
        for line in message_to_text(message, "from"):
            log.info(line)

        return Response.from_message(message, rtt)
    finally:
        await context.shutdown()
