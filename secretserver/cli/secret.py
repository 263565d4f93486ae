"""
Secret is a module that provides a way to read and manage secrets on the server.
"""

import click

from rich.table import Table

from .util import (
    console,
    check,
    click_group,
    get_client,
)
from ..api.types.secret import Secret, SecretField


@click_group()
def secret():
    """
    Read and manage secrets on the Secret Server.

    The server and credentials are taken from the TSS_USERNAME, TSS_PASSWORD,
    and TSS_TENANT (or TSS_SERVER_URL) environment variables. A secret is
    addressed either by its numeric id or by its folder path and name, such as
    `/Personal Folders/My Secret`.
    """
    pass


@secret.command()
@click.option("--id", "-i", "id_", type=int, help="Secret id")
@click.option("--path", "-p", help="Secret folder path and name, e.g. /Folder/Name")
@click.option(
    "--field",
    "-f",
    "field_names",
    multiple=True,
    help="Field name or slug to print. Can be given multiple times.",
)
def get(id_, path, field_names):
    """
    Prints field values of a secret. If no field is given, the password field is
    printed.
    """
    check(
        (id_ is None) != (path is None),
        "Exactly one of [red]--id[/] or [red]--path[/] must be given.",
    )
    reference = id_ if id_ is not None else path
    s = get_client().secret.get(reference)
    for name in field_names or ("password",):
        value, ok = s.field(name)
        if ok:
            console.print(f"The {name} for '{reference}' is {value}", markup=False)
        else:
            console.print(
                f"[yellow]Secret '{s.name}' has no field named '{name}'.[/]"
            )


@secret.command()
@click.option("--id", "-i", "id_", type=int, required=True, help="Secret id")
def fields(id_):
    """
    Lists the fields of a secret. Values are hidden.
    """
    s = get_client().secret.get(id_)
    table = Table(title=f"Secret {s.id_}: {s.name}", show_lines=True)
    table.add_column("Field ID")
    table.add_column("Name")
    table.add_column("Slug")
    table.add_column("Kind")
    for f in s.fields:
        kind = "file" if f.is_file else "password" if f.is_password else "text"
        table.add_row(str(f.field_id), f.field_name, f.slug, kind)
    console.print(table)


def _parse_field_values(values):
    parsed = []
    for v in values:
        field_id, sep, value = v.partition("=")
        check(
            sep and field_id.isdigit(),
            f"Invalid field value [red]{v}[/]. Use FIELD_ID=VALUE.",
        )
        parsed.append(SecretField(field_id=int(field_id), item_value=value))
    return parsed


@secret.command()
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--site-id", type=int, help="Site id", required=True)
@click.option("--folder-id", type=int, help="Folder id", required=True)
@click.option("--template-id", type=int, help="Secret template id", required=True)
@click.option(
    "--field",
    "-f",
    "field_values",
    multiple=True,
    help="Field value as FIELD_ID=VALUE. Can be given multiple times.",
)
def create(name, site_id, folder_id, template_id, field_values):
    """
    Creates a secret from the given template, e.g.:
    `tss secret create -n "My Secret" --site-id 1 --folder-id 2 --template-id 6003 -f 108=hunter2`
    """
    check(len(field_values), "No field value given.")
    s = Secret(
        name=name,
        site_id=site_id,
        folder_id=folder_id,
        secret_template_id=template_id,
        fields=_parse_field_values(field_values),
    )
    created = get_client().secret.create(s)
    console.print(
        f"Secret [green]{created.name}[/] created successfully with id"
        f" [green]{created.id_}[/]."
    )


@secret.command()
@click.option("--id", "-i", "id_", type=int, required=True, help="Secret id")
def remove(id_):
    """
    Deletes the secret with the given id.
    """
    get_client().secret.delete(id_)
    console.print(f"Secret [green]{id_}[/] deleted successfully.")


def add_command(cli_group):
    cli_group.add_command(secret)
