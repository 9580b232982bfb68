#!/usr/bin/python3
# Setup file for patchseries
# Copyright (C) 2025 The patchseries developers
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later

from setuptools import setup

fuzzing_require = ["atheris"]

setup(
    name="patchseries",
    version="0.1.0",
    description="Parse git format-patch output into commit records",
    license="Apache-2.0 OR GPL-2.0-or-later",
    python_requires=">=3.10",
    packages=["patchseries"],
    package_data={"": ["py.typed"]},
    install_requires=["urllib3>=2.2.2"],
    extras_require={
        "fuzzing": fuzzing_require,
    },
    entry_points={
        "console_scripts": ["patchseries=patchseries.cli:_main"],
    },
)
