# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.
# pylint: disable=broad-except,redefined-builtin,redefined-outer-name
import asyncio
from functools import wraps
from typing import (
    Any,
    Callable,
    Optional,
    Tuple,
)

import click
from click import Context

from pymindsdb.cli.output import ConsoleOutput, JsonOutput, Output
from pymindsdb.tables import TablesApiClient, load_client


def catch_exception() -> Callable:  # type: ignore
    def decorator(func: Callable) -> Callable:  # type: ignore
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):  # type: ignore
            try:
                return func(*args, **kwargs)
            except Exception as e:
                ctx: Context = click.get_current_context(silent=True)
                _, output = _client_and_output(ctx)
                output.exception(e)
                ctx.exit(1)

        return wrapper

    return decorator


@click.group()
@click.option("--server")
@click.option("--verbose", type=click.BOOL)
@click.option("--output", type=click.Choice(["text", "json"]), default="text")
@click.option("--uri")
@click.option("--token")
@click.pass_context
def run(ctx: Context, server: Optional[str], verbose: bool, output: str, uri: Optional[str], token: Optional[str]) -> None:
    properties = {}
    if uri:
        properties["uri"] = uri
    if token:
        properties["token"] = token

    ctx.ensure_object(dict)
    if output == "text":
        ctx.obj["output"] = ConsoleOutput(verbose=verbose)
    else:
        ctx.obj["output"] = JsonOutput(verbose=verbose)

    try:
        ctx.obj["client"] = load_client(server, **properties)
    except Exception as e:
        ctx.obj["output"].exception(e)
        ctx.exit(1)

    ctx.call_on_close(ctx.obj["client"].close)


def _client_and_output(ctx: Context) -> Tuple[TablesApiClient, Output]:
    """Small helper to set the types"""
    return ctx.obj["client"], ctx.obj["output"]


@run.command("list")
@click.argument("integration")
@click.pass_context
@catch_exception()
def list_tables(ctx: Context, integration: str) -> None:
    """Lists the tables of an integration"""
    client, output = _client_and_output(ctx)

    output.tables(asyncio.run(client.list_tables(integration)))


@run.command()
@click.argument("integration")
@click.argument("name")
@click.pass_context
@catch_exception()
def describe(ctx: Context, integration: str, name: str) -> None:
    """Describes a table"""
    client, output = _client_and_output(ctx)

    output.describe_table(asyncio.run(client.get_table(name, integration)))


@run.command()
@click.argument("integration")
@click.argument("name")
@click.argument("select")
@click.option("--replace", is_flag=True, help="Replace the table when it already exists")
@click.pass_context
@catch_exception()
def create(ctx: Context, integration: str, name: str, select: str, replace: bool) -> None:
    """Creates a table from a SELECT statement"""
    client, output = _client_and_output(ctx)

    if replace:
        table = asyncio.run(client.create_or_replace_table(name, integration, select))
    else:
        table = asyncio.run(client.create_table(name, integration, select))
    output.text(f"Created table: {'.'.join(table.identifier())}")


@run.command()
@click.argument("integration")
@click.argument("name")
@click.argument("select")
@click.pass_context
@catch_exception()
def insert(ctx: Context, integration: str, name: str, select: str) -> None:
    """Inserts the rows of a SELECT statement into a table"""
    client, output = _client_and_output(ctx)

    asyncio.run(client.insert_table(name, integration, select))
    output.text(f"Inserted into table: {integration}.{name}")


@run.command()
@click.argument("integration")
@click.argument("name")
@click.argument("query")
@click.pass_context
@catch_exception()
def update(ctx: Context, integration: str, name: str, query: str) -> None:
    """Updates a table"""
    client, output = _client_and_output(ctx)

    asyncio.run(client.update_table(name, integration, query))
    output.text(f"Updated table: {integration}.{name}")


@run.group()
def drop() -> None:
    """Operations to drop a table or file"""


@drop.command()
@click.argument("integration")
@click.argument("name")
@click.pass_context
@catch_exception()
def table(ctx: Context, integration: str, name: str) -> None:
    """Drops a table"""
    client, output = _client_and_output(ctx)

    asyncio.run(client.delete_table(name, integration))
    output.text(f"Dropped table: {integration}.{name}")


@drop.command()
@click.argument("name")
@click.pass_context
@catch_exception()
def file(ctx: Context, name: str) -> None:
    """Drops a file from the files integration"""
    client, output = _client_and_output(ctx)

    asyncio.run(client.delete_file(name))
    output.text(f"Dropped file: {name}")
