# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Container module for the command line utilities bundled with threadless.

``threadless.cli.client`` is the ``threadless`` command itself;
``threadless.cli.defaults`` reports which optional features are available.
"""
