"""bookingsync setup - Offline-first booking synchronization."""
from setuptools import setup, find_packages

setup(
    name="bookingsync",
    version="0.1.0",
    description="bookingsync: offline-first booking queue with remote sync",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.2",
        "requests>=2.28",
        "blake3>=0.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-timeout>=2.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "bookingsync=bookingsync.cli.main:cli",
        ],
    },
)
