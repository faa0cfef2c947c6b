#!/usr/bin/env python3
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="azure-queue-sender",
    version="0.1.0",
    description="CLI tool for sending messages to Azure Storage queues with Shared Key auth",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["qsend"],
    include_package_data=True,
    install_requires=[
        "click>=8.1.3",
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "python-dateutil>=2.8.2",
        "tabulate>=0.9.0",
    ],
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "qsend=qsend:cli",
        ],
    },
    python_requires=">=3.8",
)
