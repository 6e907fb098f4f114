# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""threadless fetches a single resource from a CoAP gateway such as the IKEA
Trådfri gateway. coaps:// URIs are accessed over DTLS, using KEY as the
pre-shared key."""

import argparse
import asyncio
import logging
import signal
import sys

import threadless.meta
from threadless import error
from threadless.credentials import Credential
from threadless.defaults import (
    DEFAULT_TIMEOUT,
    color_missing_modules,
    colorlog_missing_modules,
    get_default_timeout,
)
from threadless.exchange import exchange
from threadless.present import describe, present
from threadless.request import build_request
from threadless.target import Target
from threadless.util.cli import ActionNoYes, ExitCodeArgumentParser, positive_float

log = logging.getLogger("coap.threadless")

EPILOG = """\
exit codes:
  0  the response was displayed
  1  the command line or URI could not be used
  2  the request failed (DTLS handshake, network)
  3  waiting for the response was interrupted
  4  no response arrived in time
  5  the response payload could not be decoded
  6  the gateway responded with an error code
"""


def build_parser():
    p = ExitCodeArgumentParser(
        prog="threadless",
        description=__doc__,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        error_exitcode=error.MalformedInput.exitcode,
    )
    p.add_argument(
        "-v",
        "--verbose",
        help="Increase the debug output",
        action="count",
    )
    p.add_argument(
        "-q",
        "--quiet",
        help="Decrease the debug output, and only show the payload",
        action="count",
    )
    p.add_argument(
        "--version", action="version", version="%(prog)s " + threadless.meta.version
    )
    p.add_argument(
        "--color",
        help="Color output (default on TTYs if all required modules are installed)",
        default=None,
        action=ActionNoYes,
    )
    p.add_argument(
        "--timeout",
        help="Seconds to wait for the response (default: $THREADLESS_TIMEOUT or %s)"
        % DEFAULT_TIMEOUT,
        type=positive_float,
        metavar="SECONDS",
    )
    p.add_argument(
        "--identity",
        help="PSK identity to present (default: empty, as the gateway expects for its printed key)",
        default="",
    )
    p.add_argument(
        "key",
        metavar="KEY",
        help="The key printed at the bottom of the gateway",
    )
    p.add_argument(
        "uri",
        metavar="URI",
        nargs="?",
        help="The CoAP URI of the remote endpoint or resource; a coaps URI"
        " will automatically use CoAP over DTLS",
    )
    return p


# level of the "coap" logger hierarchy by verbosity, from -q -q to -v -v -v
_coap_levels = {
    -2: logging.CRITICAL + 1,
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


def configure_logging(verbosity, color):
    """Send log output to stderr, colored if requested and colorlog is
    available, and set levels: threadless's own messages show from one -v on,
    aiocoap's from two."""
    if color and not colorlog_missing_modules():
        import colorlog

        colorlog.basicConfig()
    else:
        logging.basicConfig()

    verbosity = max(min(verbosity, 3), -2)
    logging.getLogger("coap").setLevel(_coap_levels[verbosity])
    if verbosity == 1:
        log.setLevel(logging.INFO)

    log.debug("Logging configured.")


async def single_request(options):
    """Run the request described by the parsed command line options.

    Returns the successful :class:`threadless.exchange.Response`; every other
    outcome is raised as a :class:`threadless.error.Error`."""
    target = await Target.from_uri(options.uri).resolve()
    credential = Credential.from_argument(options.key, options.identity)

    if target.is_secure:
        log.info("Using %r for %s", credential, target.address_hostinfo)
    else:
        log.info("Plain coap:// request, the key is not used")

    request = build_request(target)
    response = await exchange(
        request, credentials=credential.bind(target), timeout=options.timeout
    )

    if not response.code.is_successful():
        raise error.ErrorResponse(response)
    return response


def report_error(e, verbosity):
    print(str(e), file=sys.stderr)
    if isinstance(e, error.ErrorResponse) and e.response.payload:
        print(e.response.payload.decode("utf8", errors="replace"), file=sys.stderr)
    if verbosity > 0:
        extra_help = e.extra_help()
        if extra_help:
            print("Debugging hint:", extra_help, file=sys.stderr)


async def main(args=None):
    """Run the client on the given (or the process's) arguments and return
    the exit code"""
    if args is None:
        args = sys.argv[1:]

    parser = build_parser()
    if not args:
        parser.print_help(sys.stdout)
        return error.EXIT_OK

    options = parser.parse_args(args)
    verbosity = (options.verbose or 0) - (options.quiet or 0)

    missing = color_missing_modules()
    if options.color and missing:
        parser.error(
            "Color output requires the following additional module(s) to be"
            " installed: %s" % ", ".join(missing)
        )
    if options.color is None:
        options.color = sys.stdout.isatty() and not missing

    configure_logging(verbosity, options.color)

    if options.timeout is None:
        try:
            options.timeout = get_default_timeout()
        except ValueError as e:
            parser.error("Invalid THREADLESS_TIMEOUT: %s" % e)

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGTERM, asyncio.current_task().cancel)
    except (NotImplementedError, RuntimeError):
        # Not available on win32 or outside the main thread; Ctrl-C still
        # works there
        sigterm_handled = False
    else:
        sigterm_handled = True

    try:
        response = await single_request(options)
        text = present(response, color=options.color)
    except error.Error as e:
        report_error(e, verbosity)
        return e.exitcode
    finally:
        if sigterm_handled:
            loop.remove_signal_handler(signal.SIGTERM)

    if verbosity >= 0:
        for line in describe(response):
            print(line)
    print(text)
    return error.EXIT_OK


def sync_main(args=None):
    try:
        exitcode = asyncio.run(main(args=args))
    except (KeyboardInterrupt, asyncio.CancelledError):
        print(error.Interrupted.message, file=sys.stderr)
        exitcode = error.Interrupted.exitcode
    sys.exit(exitcode)


if __name__ == "__main__":
    sync_main()
