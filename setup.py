#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup configuration for pas-sdk package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pas-sdk",
    version="0.1.0",
    author="PAS SDK Developers",
    description="Python client for the privileged access service API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pas_sdk", "pas_sdk.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
)
