#!/usr/bin/env python3
"""n8n-provision CLI - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="n8n-provision",
    version="1.0.0",
    description="Single-node n8n installer with nginx reverse proxy and Let's Encrypt TLS",
    author="n8n-provision Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"n8n_provision": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "n8n-provision=n8n_provision.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
