# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

from .cli.client import sync_main

sync_main()
