import os
from setuptools import setup, find_packages

with open(
    os.path.join(
        os.path.dirname(os.path.realpath(__file__)), "secretserver", "requirements.txt"
    )
) as f:
    requirements = f.read().splitlines()

setup(
    name="secretserver",
    version="0.1",
    description="Python client for the Secret Server REST API",
    packages=find_packages(include=["secretserver", "secretserver.*"]),
    package_data={"secretserver": ["requirements.txt"]},
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "responses"],
    },
    entry_points={
        "console_scripts": [
            "tss = secretserver.cli:tss",
        ],
    },
)
