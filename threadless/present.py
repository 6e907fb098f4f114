# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Turning responses into text for the terminal

:func:`present` picks the rendering by the response's Content-Format:

* ``application/link-format`` is shown as it came, below a "Discovered
  resources" header,
* ``application/json`` is decoded and re-indented (see
  :mod:`threadless.prettyprint`); undecodable JSON is an error,
* anything else is shown below a header naming the unknown format, as text if
  it is valid UTF-8 and as a hex dump otherwise.
"""

from aiocoap.numbers import ContentFormat

from . import prettyprint


def present(response, *, color=False):
    """Return the text to show for a response's payload.

    Raises :class:`.error.MalformedResponse` for JSON payloads that can not
    be decoded; never fails on unknown content formats.

    With ``color`` set, JSON is colored using pygments."""
    cf = response.content_format

    if cf == ContentFormat.LINKFORMAT:
        return "Discovered resources:\n" + response.payload.decode(
            "utf8", errors="replace"
        )
    elif cf == ContentFormat.JSON:
        formatted = prettyprint.render(prettyprint.decode(response.payload))
        if color:
            formatted = _highlight(formatted, "application/json")
        return "JSON payload:\n" + formatted
    else:
        return "%s\n%s" % (_unknown_format(cf), _opaque(response.payload))


def describe(response):
    """Yield lines describing the response's metadata: code, origin,
    Content-Format and round-trip time."""
    yield f"{response.code} from {response.remote_uri}"
    cf = response.content_format
    if cf is None:
        yield "Content format: unspecified"
    elif cf.is_known():
        yield f"Content format: {cf.media_type} ({int(cf)})"
    else:
        yield f"Content format: {int(cf)}"
    yield "Round-trip time: %.1f ms" % (response.rtt * 1000)


def message_to_text(m, direction):
    """Yield log lines for a message: code and peer, one line per option and a
    summary of the payload (never its full content)"""
    if m.remote is None:
        peer = "(unknown peer)"
    else:
        peer = "%s://%s" % (m.remote.scheme, m.remote.hostinfo)
    yield "%s %s %s" % (m.code, direction, peer)

    for opt in m.opt.option_list():
        name = getattr(opt.number, "name", None)
        if name is None:
            yield "  option %d: %r" % (opt.number, opt.value)
        else:
            yield "  option %s (%d): %r" % (name, opt.number, opt.value)

    yield _payload_summary(m.payload)


def _payload_summary(payload, limit=16):
    if not payload:
        return "  no payload"
    shown = payload[:limit].hex()
    if len(payload) > limit:
        shown += "..."
    return "  payload %s (%d bytes)" % (shown, len(payload))


def _unknown_format(cf):
    if cf is None:
        return "Unknown content format: unspecified"
    elif cf.is_known():
        return "Unknown content format: %d (%s)" % (cf, cf.media_type)
    else:
        return "Unknown content format: %d" % cf


def _opaque(payload):
    if not payload:
        return "No payload"
    try:
        return payload.decode("utf8")
    except UnicodeDecodeError:
        return hexdump(payload)


def hexdump(data):
    """Render binary data in the style of ``hexdump -C``

    >>> print(hexdump(b"\\x00\\x01Tr\\xc3\\xa5dfri"))
    00000000  00 01 54 72 c3 a5 64 66  72 69                    |..Tr..dfri|
    0000000a
    """
    lines = []
    offset = 0
    while data:
        line, data = data[:16], data[16:]
        lines.append(
            "%08x  " % offset
            + " ".join("%02x" % line[i] if i < len(line) else "  " for i in range(8))
            + "  "
            + " ".join(
                "%02x" % line[i] if i < len(line) else "  " for i in range(8, 16)
            )
            + "  |"
            + "".join(chr(x) if 32 <= x < 127 else "." for x in line)
            + "|"
        )
        offset += len(line)
    if offset % 16 != 0:
        lines.append("%08x" % offset)
    return "\n".join(lines)


def _highlight(text, mime):
    from pygments import highlight
    from pygments.formatters import TerminalFormatter
    from pygments.lexers import get_lexer_for_mimetype

    # TerminalFormatter terminates the output with a newline
    return highlight(text, get_lexer_for_mimetype(mime), TerminalFormatter()).rstrip(
        "\n"
    )
