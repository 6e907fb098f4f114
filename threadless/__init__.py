# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""
threadless
==========

A single-shot command line client for CoAP gateways (such as the IKEA Trådfri
gateway) that are protected by DTLS with a pre-shared key.

One invocation performs exactly one GET request and prints the result::

    $ threadless 'the-key-from-the-label' coaps://gateway.local/15001

The pipeline is available in parts for use from Python:

* :class:`threadless.target.Target` parses and resolves the address,
* :class:`threadless.credentials.Credential` binds the key to that peer,
* :func:`threadless.request.build_request` builds the message,
* :func:`threadless.exchange.exchange` runs the request on an aiocoap context,
* :func:`threadless.present.present` turns the response into text.

The CoAP and DTLS work itself is done by `aiocoap`_.

.. _aiocoap: https://christian.amsuess.com/tools/aiocoap/
"""

from .target import Target
from .credentials import Credential
from .request import build_request
from .exchange import exchange, Response
from .present import present
from . import error

__all__ = [
    "Target",
    "Credential",
    "build_request",
    "exchange",
    "Response",
    "present",
    "error",
]
