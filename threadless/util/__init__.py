# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""Miscellaneous helpers that are not particular to threadless"""
