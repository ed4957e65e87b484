#!/usr/bin/env python3
"""
CLI tool for the administration API
Manages billing plans from declarative YAML/JSON files
"""

import json
import logging
import sys
from dataclasses import replace

import click
import yaml
from tabulate import tabulate

from config import get_config
from errors import AdministrationError, AuthError, ConfigurationError, RemoteError
from provider import AdministrationProvider
from resources.base import ResourceState
from resources.billing_plan.mapper import diff_plans, plan_to_dict

PLAN_TYPE = "administration_billing_plan"


def _load_file(filename):
    """Read a declarative config from a YAML or JSON file"""
    with open(filename, "r") as f:
        try:
            if filename.endswith(".yaml") or filename.endswith(".yml"):
                return yaml.safe_load(f)
            return json.load(f)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot parse {filename}: {e}") from e


def _fail(error):
    """Report an error with its response detail and exit"""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, (RemoteError, AuthError)):
        click.echo(f"Status: {error.status}", err=True)
        click.echo(f"Detail: {error.body}", err=True)
    sys.exit(1)


def _get_handler(ctx):
    """Configure the provider once per invocation and return the plan handler"""
    if "handler" not in ctx.obj:
        provider = AdministrationProvider()
        provider.configure(
            auth_server=ctx.obj["auth_server"],
            host=ctx.obj["host"],
            client_id=ctx.obj["client_id"],
            client_secret=ctx.obj["client_secret"],
        )
        ctx.obj["handler"] = provider.get_resource(PLAN_TYPE)
    return ctx.obj["handler"]


def _echo_plan(plan, output="json"):
    data = plan_to_dict(plan)
    if output == "yaml":
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif output == "table":
        rows = [
            ["ID", data["id"]],
            ["Name", data["name"]],
            ["State", data["state"]],
            ["Last Updated", data["last_updated"] or "N/A"],
            ["Features", ", ".join(data["features"])],
        ]
        rows += [[f"Limit {i['name']}", i["value"]] for i in data["limits"]]
        rows += [
            [
                f"Price {i['subscribe_for_year']}y",
                f"{i['monthly_price']} {i['monthly_price_currency']}/month",
            ]
            for i in data["pricing"]
        ]
        click.echo(tabulate(rows, tablefmt="grid"))
    else:
        click.echo(json.dumps(data, indent=2))


output_option = click.option(
    "--output", "-o", type=click.Choice(["json", "yaml", "table"]), default="json"
)


@click.group()
@click.option("--auth-server", default=None, help="Auth server URL [ADMINISTRATION_AUTH_SERVER]")
@click.option("--host", default=None, help="API host URL [ADMINISTRATION_HOST]")
@click.option("--client-id", default=None, help="Client id [ADMINISTRATION_CLIENT_ID]")
@click.option(
    "--client-secret", default=None, help="Client secret [ADMINISTRATION_CLIENT_SECRET]"
)
@click.option("--log-level", default=None, help="Log level [LOG_LEVEL]")
@click.pass_context
def cli(ctx, auth_server, host, client_id, client_secret, log_level):
    """Administration CLI - manage billing plans declaratively"""
    log_config = get_config().logging
    logging.basicConfig(
        level=(log_level or log_config.level).upper(),
        format=log_config.format,
    )
    ctx.ensure_object(dict)
    ctx.obj.update(
        auth_server=auth_server,
        host=host,
        client_id=client_id,
        client_secret=client_secret,
    )


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@output_option
@click.pass_context
def create(ctx, filename, output):
    """Create a billing plan from a YAML/JSON file"""
    try:
        handler = _get_handler(ctx)
        plan = handler.create(handler.parse_config(_load_file(filename)))
    except AdministrationError as e:
        _fail(e)

    click.echo(f"Billing plan {plan.id} created successfully!", err=True)
    _echo_plan(plan, output)


@cli.command()
@click.argument("plan_id")
@output_option
@click.pass_context
def get(ctx, plan_id, output):
    """Show a billing plan"""
    try:
        plan = _get_handler(ctx).read(plan_id)
    except AdministrationError as e:
        _fail(e)

    _echo_plan(plan, output)


@cli.command()
@click.argument("plan_id")
@click.argument("filename", type=click.Path(exists=True))
@output_option
@click.pass_context
def update(ctx, plan_id, filename, output):
    """Overwrite a billing plan from a file"""
    try:
        handler = _get_handler(ctx)
        desired = handler.parse_config(_load_file(filename))
        desired = replace(desired, id=plan_id, state=ResourceState.CREATED)
        plan = handler.update(plan_id, desired)
    except AdministrationError as e:
        _fail(e)

    click.echo(f"Billing plan {plan_id} updated successfully!", err=True)
    _echo_plan(plan, output)


@cli.command()
@click.argument("plan_id")
@click.confirmation_option(prompt="Are you sure you want to delete this billing plan?")
@click.pass_context
def delete(ctx, plan_id):
    """Delete a billing plan"""
    try:
        handler = _get_handler(ctx)
        current = handler.read(plan_id)
        handler.delete(plan_id, current)
    except AdministrationError as e:
        _fail(e)

    click.echo(f"Billing plan {plan_id} ({current.name}) deleted")


@cli.command("import")
@click.argument("plan_id")
@output_option
@click.pass_context
def import_plan(ctx, plan_id, output):
    """Adopt an existing billing plan and print its tracked state"""
    try:
        plan = _get_handler(ctx).import_state(plan_id)
    except AdministrationError as e:
        _fail(e)

    _echo_plan(plan, output)


@cli.command()
@click.argument("plan_id")
@click.argument("filename", type=click.Path(exists=True))
@click.pass_context
def diff(ctx, plan_id, filename):
    """Show fields that differ between a file and the remote billing plan"""
    try:
        handler = _get_handler(ctx)
        desired = handler.parse_config(_load_file(filename))
        remote = handler.read(plan_id)
    except AdministrationError as e:
        _fail(e)

    changed = diff_plans(desired, remote)
    if not changed:
        click.echo(f"✓ Billing plan {plan_id} is up to date")
        return

    desired_data = plan_to_dict(desired)
    remote_data = plan_to_dict(remote)
    rows = [
        [name, json.dumps(desired_data[name]), json.dumps(remote_data[name])]
        for name in changed
    ]
    click.echo(tabulate(rows, headers=["Field", "Desired", "Remote"], tablefmt="grid"))


@cli.command()
@click.argument("filename", type=click.Path(exists=True))
@click.option("--id", "plan_id", default=None, help="Identifier of an existing plan")
@output_option
@click.pass_context
def apply(ctx, filename, plan_id, output):
    """Create or update a billing plan so it matches a file"""
    try:
        handler = _get_handler(ctx)
        desired = handler.parse_config(_load_file(filename))
        current = None
        if plan_id:
            current = replace(desired, id=plan_id, state=ResourceState.CREATED)
        result = handler.reconcile(desired, current)
    except AdministrationError as e:
        _fail(e)

    click.echo(result.message, err=True)
    _echo_plan(result.plan, output)


if __name__ == "__main__":
    cli()
