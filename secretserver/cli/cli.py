import click

import secretserver
from secretserver._internal import logging as internal_logging
from . import secret

from .util import click_group

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.version_option(secretserver.__version__, "-v", "--version")
@click_group(context_settings=CONTEXT_SETTINGS)
def tss():
    """
    Tss is the main entry point for the secretserver commandline interface. It
    reads secrets, and the fields in them, from a Secret Server, and creates and
    removes secrets.
    """
    internal_logging.enable()


# Add subcommands
secret.add_command(tss)


if __name__ == "__main__":
    tss()
