# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""This module contains helpers that give sane default values to threadless
settings, taking the environment into account.

Like in aiocoap, the ``_missing_modules`` functions tell which optional
modules are unavailable. They influence defaults and user-visible messages,
but the rest of the code just imports and lets ImportErrors fly."""

import math
import os

from aiocoap.defaults import dtls_missing_modules  # noqa: F401

#: Seconds to wait for a response when neither ``--timeout`` nor the
#: ``THREADLESS_TIMEOUT`` environment variable is given
DEFAULT_TIMEOUT = 5.0


def get_default_timeout(*, use_env=True):
    """Return the time in seconds that a request may take.

    If a ``THREADLESS_TIMEOUT`` environment variable is set, it is read as a
    number of seconds; an unparsable value raises ValueError.

    >>> get_default_timeout(use_env=False)
    5.0
    """

    if use_env and "THREADLESS_TIMEOUT" in os.environ:
        timeout = float(os.environ["THREADLESS_TIMEOUT"])
        if not math.isfinite(timeout) or timeout <= 0:
            raise ValueError("THREADLESS_TIMEOUT needs to be a positive number of seconds")
        return timeout

    return DEFAULT_TIMEOUT


def color_missing_modules():
    """Return a list of modules that are missing in order to color the output,
    or a false value if everything is present"""

    missing = []

    try:
        import pygments  # noqa: F401
    except ImportError:
        missing.append("pygments")

    return missing


def colorlog_missing_modules():
    """Return a list of modules that are missing in order to color log
    messages, or a false value if everything is present"""

    missing = []

    try:
        import colorlog  # noqa: F401
    except ImportError:
        missing.append("colorlog")

    return missing
