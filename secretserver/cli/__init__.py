# flake8: noqa
"""
This implements the CLI for the secretserver library. When you install the
library, you get a command line tool called `tss` that you can use to read and
manage secrets on a Secret Server.
"""

from .cli import tss
