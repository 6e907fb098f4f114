# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

#: Library version
#:
#: This is not supposed to be used in any decision-making process; it is shown
#: by ``--version`` and by ``python3 -m threadless.cli.defaults``.
version = "0.1.0"

#: Where users are asked to report unexpected errors
bugreport_uri = "https://github.com/hindsholm/threadless/issues"
