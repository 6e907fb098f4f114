# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""This helper script shows which optional parts of threadless are usable in
the current environment (ie. whether the modules for DTLS and colored output
are available) and which defaults are in effect; run it as
`python3 -m threadless.cli.defaults`."""

import argparse
import os
import sys

from aiocoap.defaults import get_default_clienttransports
from aiocoap.meta import version as aiocoap_version

from threadless.meta import version
from threadless.defaults import (
    color_missing_modules,
    colorlog_missing_modules,
    dtls_missing_modules,
    get_default_timeout,
)


def main(args=None):
    p = argparse.ArgumentParser(description=__doc__)
    # Allow passing this in as THREADLESS_DEFAULTS_EXPECT_ALL=1 via the
    # environment, as that's easier to set in CI
    p.add_argument(
        "--expect-all",
        help="Exit with an error unless all subsystems are available",
        action="store_true",
        default=os.environ.get("THREADLESS_DEFAULTS_EXPECT_ALL") == "1",
    )
    p.add_argument("--version", action="version", version=version)
    options = p.parse_args(args)

    exitcode = 0

    print("Python version: %s" % sys.version)
    print("threadless version: %s" % version)
    print("aiocoap version: %s" % aiocoap_version)
    print("Modules missing for subsystems:")
    for m in (dtls_missing_modules, color_missing_modules, colorlog_missing_modules):
        name = m.__name__[: -len("_missing_modules")]
        missing = m()
        if missing and options.expect_all:
            exitcode = 1
        print(
            "    %s: %s"
            % (name, "everything there" if not missing else "missing " + ", ".join(missing))
        )
    print("Selected client transports: %s" % ":".join(get_default_clienttransports()))
    try:
        print("Request timeout: %s seconds" % get_default_timeout())
    except ValueError as e:
        print("Request timeout: invalid THREADLESS_TIMEOUT (%s)" % e)
        exitcode = 1

    if exitcode and options.expect_all:
        print(
            "Exiting unsuccessfully because --expect-all was set and not all"
            " extras are available."
        )
    return exitcode


if __name__ == "__main__":
    sys.exit(main())
