#!/usr/bin/env python3

# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

from pathlib import Path

from setuptools import setup, find_packages

meta = {}
exec((Path(__file__).parent / "threadless" / "meta.py").read_text(), meta)

setup(
    name="threadless",
    version=meta["version"],
    description="Single-shot command line client for DTLS-PSK protected CoAP gateways",
    long_description=(Path(__file__).parent / "README.rst").read_text(),
    long_description_content_type="text/x-rst",
    license="MIT",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiocoap >= 0.4.7",
    ],
    extras_require={
        "dtls": ["aiocoap[tinydtls] >= 0.4.7"],
        "color": ["pygments", "colorlog"],
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "threadless = threadless.cli.client:sync_main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Home Automation",
        "Topic :: Internet",
    ],
)
