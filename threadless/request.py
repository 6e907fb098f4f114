# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Construction of the single request a run sends"""

import aiocoap
from aiocoap.numbers import ContentFormat


def build_request(target):
    """Build a GET request for a resolved :class:`.target.Target`.

    The request is addressed to the resolved address, which is also what the
    credential got bound to. It carries a text/plain Content-Format option;
    an Accept option is not set, as the gateway would then refuse resources
    it only has in JSON.

    >>> from threadless.target import Target
    >>> target = Target.from_uri("coap://gw.local/15001")._replace(
    ...     address=("192.0.2.1", 5683))
    >>> request = build_request(target)
    >>> request.code, request.get_request_uri()
    (<Request Code 1 "GET">, 'coap://192.0.2.1/15001')
    """
    if target.address is None:
        raise ValueError("Requests can only be built for resolved targets")

    return aiocoap.Message(
        code=aiocoap.GET,
        uri=target.address_uri,
        content_format=ContentFormat.TEXT,
    )
