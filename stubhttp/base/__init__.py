# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Code in ``stubhttp.base`` is the lowest level of the package. It holds the literals and
magic numbers the rest of the package shares.

Modules prohibited from importing ``stubhttp.base`` are:

- ``stubhttp.common``
"""
