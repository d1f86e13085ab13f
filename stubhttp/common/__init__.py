# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
Code in ``stubhttp.common`` is not server-specific. It sits *aside* the server and is able
to stand independently on its own. Modules here may only import other ``stubhttp.common``
modules.
"""
