# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Helpers for command line parsing

Note that these are not particular to threadless, but kept apart from the
client so the client module only describes its own options."""

import argparse
import math
import sys


class ActionNoYes(argparse.Action):
    """Action that manages a pair of ``--something`` / ``--no-something``
    options with a single definition

    >>> p = argparse.ArgumentParser()
    >>> _ = p.add_argument("--color", action=ActionNoYes, default=None)
    >>> p.parse_args(["--no-color"]).color, p.parse_args([]).color
    (False, None)
    """

    def __init__(self, option_strings, dest, default=True, required=False, help=None):
        if len(option_strings) != 1 or not option_strings[0].startswith("--"):
            raise ValueError("ActionNoYes takes exactly one option starting with --")
        name = option_strings[0][2:]
        super().__init__(
            ["--" + name, "--no-" + name],
            dest,
            nargs=0,
            const=None,
            default=default,
            required=required,
            help=help,
        )

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, not option_string.startswith("--no-"))


class ExitCodeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with a configurable exit code

    argparse exits with 2 on usage errors; programs that give meaning to their
    exit codes can pick a code that does not collide with their own."""

    def __init__(self, *args, error_exitcode=2, **kwargs):
        self.error_exitcode = error_exitcode
        super().__init__(*args, **kwargs)

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(self.error_exitcode, "%s: error: %s\n" % (self.prog, message))


def positive_float(text):
    """argparse type for durations

    >>> positive_float("2.5")
    2.5
    """
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError("%r is not a number" % text)
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError("%r is not a positive number" % text)
    return value
