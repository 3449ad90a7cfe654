# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Setup configuration for the flowengine workflow execution engine
"""

from setuptools import setup, find_packages

setup(
    name="flowengine",
    version="0.1.0",
    description="Sequential execution engine for stored workflow graphs",
    packages=find_packages(include=["flowengine", "flowengine.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "httpx>=0.24",
        "aiofiles>=23.1",
        "fastapi>=0.100",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21",
        ],
    },
)
