"""
Common utilities for the CLI.
"""

import sys
import traceback
from typing import Any, Optional

import click
import requests
from loguru import logger
from rich.console import Console

from secretserver.api.api_resource import ClientError, ServerError
from secretserver.api.client import APIClient
from secretserver.api.secret import DecodeError, InvalidReference
from secretserver.api.utils import SecretServerError, ServerConfigurationError

console = Console(highlight=False)


def click_group(*args, **kwargs):
    """
    A wrapper around click.group that allows for command shorthands as long as
    they are unambiguous, e.g. `tss sec get` for `tss secret get`. It also turns
    errors raised by the api into readable messages and a non-zero exit code.
    """

    class ClickAliasedGroup(click.Group):
        def get_command(self, ctx, cmd_name):
            rv = click.Group.get_command(self, ctx, cmd_name)
            if rv is not None:
                return rv

            def is_abbrev(x, y):
                # first char must match
                if x[0] != y[0]:
                    return False
                it = iter(y)
                return all(any(c == ch for c in it) for ch in x)

            matches = [x for x in self.list_commands(ctx) if is_abbrev(cmd_name, x)]

            if not matches:
                return None
            elif len(matches) == 1:
                return click.Group.get_command(self, ctx, matches[0])
            ctx.fail(f"'{cmd_name}' is ambiguous: {', '.join(sorted(matches))}")

        def resolve_command(self, ctx, args):
            # always return the full command name
            _, cmd, args = super().resolve_command(ctx, args)
            return cmd.name, cmd, args

        def group(self, *g_args, **g_kwargs):
            # Ensure nested groups also inherit this group's behavior
            if "cls" not in g_kwargs:
                g_kwargs["cls"] = ClickAliasedGroup
            return super().group(*g_args, **g_kwargs)

        def invoke(self, ctx):
            try:
                return super().invoke(ctx)
            except ServerConfigurationError as e:
                console.print(f"[red]Server configuration error[/]: {e}")
                sys.exit(1)
            except SecretServerError as e:
                console.print(f"[red]{e.__class__.__name__}[/]: {e}")
                sys.exit(1)
            except ClientError as e:
                if e.status_code == 404:
                    console.print(f"[red]404 Not Found[/]: {e.text}")
                elif e.status_code in (401, 403):
                    console.print(
                        f"\n[red]{e.status_code} Unauthorized[/]: {e.text}\n\n"
                        "[yellow]Hint:[/yellow] check TSS_USERNAME and TSS_PASSWORD,"
                        " and that the user has access to the secret.\n"
                    )
                else:
                    console.print(f"[red]{e.status_code} Error[/]: {e.text}")
                sys.exit(1)
            except ServerError as e:
                console.print(f"[red]{e.status_code} Error[/]: {e.text}")
                sys.exit(1)
            except requests.RequestException as e:
                console.print(f"[red]Connection error[/]: {e}")
                sys.exit(1)
            except (click.ClickException, click.exceptions.Exit):
                raise
            except (InvalidReference, DecodeError) as e:
                console.print(f"[red]Error[/]: {e}")
                logger.trace(traceback.format_exc())
                sys.exit(1)

    return click.group(*args, cls=ClickAliasedGroup, **kwargs)


# Singleton API client for CLI process
_client_singleton: Optional[APIClient] = None


def get_client() -> APIClient:
    global _client_singleton
    if _client_singleton is None:
        _client_singleton = APIClient()
    return _client_singleton


def check(condition: Any, message: str) -> None:
    """
    Checks a condition and prints a message if the condition is false.

    :param condition: The condition to check.
    :param message: The message to print if the condition is false.
    """
    if not condition:
        console.print(message)
        sys.exit(1)
