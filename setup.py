from setuptools import setup, find_packages

setup(
    name="chemion_sdk",
    version="0.1.0",
    description="Drive Chemion LED glasses over Bluetooth Low Energy",
    packages=find_packages(include=["connector", "services", "utils"]),
    python_requires=">=3.10",
    install_requires=[
        "bleak>=0.21.1",
        "rich>=13.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "chemion=connector.cli:cli_main",
        ],
    },
)
