#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing,
#  software distributed under the License is distributed on an
#  "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
#  KIND, either express or implied.  See the License for the
#  specific language governing permissions and limitations
#  under the License.

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import (
    Dict,
    List,
    Optional,
    cast,
)

from pymindsdb.exceptions import InvalidIdentifierError, NoSuchTableError
from pymindsdb.table import Table
from pymindsdb.typedef import Properties, RecursiveDict
from pymindsdb.utils.config import Config, merge_config
from pymindsdb.utils.deprecated import deprecated

logger = logging.getLogger(__name__)

_ENV_CONFIG = Config()

URI = "uri"
TOKEN = "token"
USER = "user"
PASSWORD = "password"
DATABASE = "database"
DEFAULT_DATABASE = "mindsdb"


def load_client(name: Optional[str] = None, **properties: Optional[str]) -> TablesApiClient:
    """Load a client based on the properties.

    Will look up the properties from the config, based on the name. Explicitly
    passed properties take precedence over the configured ones.

    Args:
        name: The name of the server in the configuration.
        properties: The properties that are used next to the configuration.

    Returns:
        An initialized TablesApiClient.

    Raises:
        ValueError: Raises a ValueError in case the uri is missing, or not an http(s) uri.
    """
    if name is None:
        name = _ENV_CONFIG.get_default_server_name()

    env = _ENV_CONFIG.get_server_config(name)
    conf: RecursiveDict = merge_config(env or {}, cast(RecursiveDict, properties))

    uri = conf.get(URI)
    if not uri:
        raise ValueError(
            f"URI missing, please provide using --uri, the config or environment variable PYMINDSDB_SERVER__{name.upper()}__URI"
        )
    if not isinstance(uri, str):
        raise ValueError(f"Expects the URI to be a string, got: {type(uri)}")
    if not uri.startswith("http"):
        raise ValueError(f"Could not initialize a client for the uri: {uri}, only http(s) is supported")

    from pymindsdb.tables.rest import RestTablesApiClient

    logger.debug("Loading client %s for %s", name, uri)
    return RestTablesApiClient(name, **cast(Dict[str, str], conf))


class TablesApiClient(ABC):
    """Table operations supported against a MindsDB server.

    Tables are addressed by their name and the name of the integration they are part of.
    Every operation is a coroutine and either completes, or raises a MindsDBError.

    Attributes:
        name (str): Name of the client, used to look up its configuration.
        properties (Properties): Client properties.
    """

    name: str
    properties: Properties

    def __init__(self, name: str, **properties: str):
        self.name = name
        self.properties = properties

    @abstractmethod
    async def create_table(self, name: str, integration: str, select: str) -> Table:
        """Creates a table in an integration from a given SELECT statement.

        Args:
            name (str): Name of the table to be created.
            integration (str): Name of the integration the table will be a part of.
            select (str): SELECT statement used to populate the new table with data.

        Returns:
            Table: the newly created table.

        Raises:
            TableAlreadyExistsError: If a table with the name already exists in the integration.
            NoSuchIntegrationError: If the integration does not exist.
            InvalidStatementError: If the SELECT statement is empty or fails on the server.
        """

    @abstractmethod
    async def create_or_replace_table(self, name: str, integration: str, select: str) -> Table:
        """Creates a table in an integration from a given SELECT statement.

        If the table already exists, it is deleted first and then recreated.

        Args:
            name (str): Name of the table to be created or replaced.
            integration (str): Name of the integration the table will be a part of.
            select (str): SELECT statement used to populate the table with data.

        Returns:
            Table: the newly created or replaced table.

        Raises:
            NoSuchIntegrationError: If the integration does not exist.
            InvalidStatementError: If the SELECT statement is empty or fails on the server.
        """

    @abstractmethod
    async def delete_table(self, name: str, integration: str) -> None:
        """Deletes a table from its integration.

        Args:
            name (str): Name of the table to be deleted.
            integration (str): Name of the integration the table is a part of.

        Raises:
            NoSuchTableError: If the table does not exist.
            NoSuchIntegrationError: If the integration does not exist.
        """

    @abstractmethod
    async def update_table(self, name: str, integration: str, update_query: str) -> None:
        """Updates a table in its integration.

        Args:
            name (str): Name of the table to be updated.
            integration (str): Name of the integration the table is a part of.
            update_query (str): The SQL UPDATE query to run for updating the table.

        Raises:
            NoSuchTableError: If the table does not exist.
            InvalidStatementError: If the query is empty or fails on the server.
        """

    @abstractmethod
    async def insert_table(self, name: str, integration: str, select: str) -> None:
        """Inserts the rows of a SELECT statement into a table.

        Args:
            name (str): Name of the table to insert into.
            integration (str): Name of the integration the table is a part of.
            select (str): SELECT query to insert data from.

        Raises:
            NoSuchTableError: If the table does not exist.
            InvalidStatementError: If the query is empty, fails, or does not match the table.
        """

    @abstractmethod
    async def delete_file(self, name: str) -> None:
        """Deletes a file from the files integration.

        Args:
            name (str): Name of the file to be deleted.

        Raises:
            NoSuchFileError: If the file does not exist.
        """

    @abstractmethod
    async def list_tables(self, integration: str) -> List[Table]:
        """Lists the tables of an integration.

        Args:
            integration (str): Name of the integration.

        Returns:
            List[Table]: the tables of the integration.

        Raises:
            NoSuchIntegrationError: If the integration does not exist.
        """

    async def get_table(self, name: str, integration: str) -> Table:
        """Gets a table of an integration.

        You can also use this method to check for table existence using 'try client.get_table() except NoSuchTableError'.

        Raises:
            NoSuchTableError: If the integration has no table with the name.
            NoSuchIntegrationError: If the integration does not exist.
        """
        self._check_identifier(name, "table")
        for table in await self.list_tables(integration):
            if table.name == name:
                return table
        raise NoSuchTableError(f"Table does not exist: {integration}.{name}")

    @deprecated(
        deprecated_in="0.1.0",
        removed_in="0.3.0",
        help_message="Please use delete_table() instead",
    )
    async def remove_table(self, name: str, integration: str) -> None:
        """Removes a table from its integration, same as delete_table.

        Raises:
            NoSuchTableError: If the table does not exist.
            NoSuchIntegrationError: If the integration does not exist.
        """
        await self.delete_table(name, integration)

    def close(self) -> None:
        """Releases the resources held by the client."""

    @staticmethod
    def _check_identifier(identifier: str, kind: str) -> str:
        if not identifier or not identifier.strip():
            raise InvalidIdentifierError(f"Empty {kind} name: {identifier!r}")
        return identifier
