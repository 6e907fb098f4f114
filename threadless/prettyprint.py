# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Strict decoding and stable re-formatting of JSON payloads

The gateway describes its devices in JSON objects keyed by numeric strings.
Decoding keeps the keys in the order they arrived, and rendering keeps that
order as well:

>>> value = decode(b'{"9003":65536,"9002":1}')
>>> print(render(value))
{
    "9003": 65536,
    "9002": 1
}
>>> decode(render(value).encode("utf8")) == value
True

Anything that is not a single, well-formed JSON value is rejected rather than
shown partially:

>>> decode(b'{"9003":1,"9003":2}')
Traceback (most recent call last):
    ...
threadless.error.MalformedResponse: Invalid JSON payload: duplicate key '9003'
"""

import json

from .error import MalformedResponse

INDENT = 4


def _unique_object(pairs):
    result = {}
    for key, value in pairs:
        if key in result:
            raise MalformedResponse("Invalid JSON payload: duplicate key %r" % key)
        result[key] = value
    return result


def _reject_constant(name):
    # NaN and Infinity are accepted by the json module, but are not JSON
    raise MalformedResponse("Invalid JSON payload: %s is not a JSON value" % name)


def decode(payload):
    """Decode a UTF-8 JSON payload into Python values (dicts in arrival order,
    lists, strings, numbers, booleans and None).

    Raises :class:`.error.MalformedResponse` if the payload can not be
    decoded."""
    try:
        text = payload.decode("utf8")
    except UnicodeDecodeError as e:
        raise MalformedResponse("Invalid JSON payload: not UTF-8 (%s)" % e) from e

    try:
        return json.loads(
            text,
            object_pairs_hook=_unique_object,
            parse_constant=_reject_constant,
        )
    except ValueError as e:
        raise MalformedResponse("Invalid JSON payload: %s" % e) from e
    except RecursionError as e:
        raise MalformedResponse("Invalid JSON payload: nested too deeply") from e


def render(value):
    """Render a decoded value as indented JSON text.

    The output only depends on the value (including the order of its keys);
    non-ASCII text is shown as is rather than escaped."""
    return json.dumps(value, indent=INDENT, ensure_ascii=False)
