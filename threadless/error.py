# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""
Errors that end a threadless run

Every error is terminal for the single request a run exists to make; none of
them is retried. Each class carries the process exit code it is reported with,
so that scripts can tell the categories apart:

====================  =====
Outcome               Code
====================  =====
success               0
MalformedInput        1
TransportError        2
Interrupted           3
Timeout               4
MalformedResponse     5
ErrorResponse         6
====================  =====
"""

#: Exit code of a run that displayed its response
EXIT_OK = 0


class Error(Exception):
    """
    Base exception for all errors that end a run without a displayed response

    The message is either given at construction or taken from the
    :attr:`message` class attribute.
    """

    exitcode = 1  #: Process exit code this error is reported with
    message = ""  #: Text shown when no message is given at construction

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def __str__(self):
        return self.message

    def extra_help(self):
        """Additional text that may point the user in the right direction, or
        None"""
        return None


class MalformedInput(Error):
    """The command line could not be turned into a request: missing or
    unparsable URI, unsupported scheme or unresolvable host"""

    exitcode = 1


class TransportError(Error):
    """The request could not be exchanged: handshake failure, unreachable
    peer, missing DTLS support

    When raised from an aiocoap error, the original is available as
    ``__cause__``, and its ``extra_help`` is passed through."""

    exitcode = 2

    def extra_help(self):
        cause = self.__cause__
        if cause is not None and hasattr(cause, "extra_help"):
            return cause.extra_help()
        return None


class Interrupted(TransportError):
    """The wait for the response was interrupted by a signal"""

    exitcode = 3
    message = "Failed to receive response: interrupted"


class Timeout(Error):
    """No response arrived within the configured time

    This indicates that the peer is unreachable or slow, not that the request
    was rejected."""

    exitcode = 4
    message = "Request timed out"

    def extra_help(self):
        return (
            "Neither a response nor an error was received. This can have a "
            "wide range of causes, from the address being wrong to the "
            "gateway ignoring requests with the wrong key."
        )


class MalformedResponse(Error):
    """The response declared a structured content format, but its payload
    could not be decoded"""

    exitcode = 5


class ErrorResponse(Error):
    """The peer answered with an unsuccessful response code

    The response is kept in :attr:`response` so its payload can still be
    shown."""

    exitcode = 6

    def __init__(self, response):
        self.response = response
        super().__init__(str(response.code))
