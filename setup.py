# -*- coding: utf-8 -*-
# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause

import os
import sys

from setuptools import find_packages, setup

if not sys.version_info[:2] >= (3, 8):
    sys.exit(
        f"stubhttp is only meant for Python 3.8 and up. "
        f"current version: {sys.version_info.major}.{sys.version_info.minor}"
    )


# When executing setup.py, we need to be able to import ourselves, this
# means that we need to add the src directory to the sys.path.
src_dir = here = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, src_dir)
import stubhttp

long_description = """
stubhttp starts a real HTTP server on a random loopback port for the length of
a single test. Every request goes to a handler the test supplies; the server
counts what it served and, when the test is done with it, shuts down and fails
the test if it was never called or if any handler raised.
"""
install_requires = [
    "requests >=2.12.4",
    "pytest >=7",
]
extras_require = {
    "test": [
        "pytest-mock",
    ],
}


setup(
    name=stubhttp.__name__,
    version=stubhttp.__version__,
    author=stubhttp.__author__,
    author_email=stubhttp.__email__,
    url=stubhttp.__url__,
    license=stubhttp.__license__,
    description=stubhttp.__summary__,
    long_description=long_description,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "build", ".tox")),
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.8",
    zip_safe=False,
)
