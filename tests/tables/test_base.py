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
# pylint:disable=redefined-outer-name
import asyncio
from typing import Dict, Iterable, List, Set

import pytest

from pymindsdb import sql
from pymindsdb.exceptions import (
    InvalidIdentifierError,
    InvalidStatementError,
    NoSuchFileError,
    NoSuchIntegrationError,
    NoSuchTableError,
    TableAlreadyExistsError,
)
from pymindsdb.table import Table
from pymindsdb.tables import TablesApiClient
from tests.conftest import TEST_INTEGRATION, TEST_SELECT, TEST_TABLE_NAME


class InMemoryTablesApiClient(TablesApiClient):
    """An in-memory client implementation for testing purposes.

    Every table keeps the statements that populated and changed it, so tests can
    check what a table has seen.
    """

    __integrations: Dict[str, Dict[str, List[str]]]
    __files: Set[str]

    def __init__(self, name: str, integrations: Iterable[str] = (TEST_INTEGRATION,), **properties: str) -> None:
        super().__init__(name, **properties)
        self.__integrations = {integration: {} for integration in integrations}
        self.__files = set()

    def _tables_of(self, integration: str) -> Dict[str, List[str]]:
        self._check_identifier(integration, "integration")
        try:
            return self.__integrations[integration]
        except KeyError as error:
            raise NoSuchIntegrationError(f"Integration does not exist: {integration}") from error

    def _statements_of(self, name: str, integration: str) -> List[str]:
        self._check_identifier(name, "table")
        try:
            return self._tables_of(integration)[name]
        except KeyError as error:
            raise NoSuchTableError(f"Table does not exist: {integration}.{name}") from error

    def statements(self, name: str, integration: str) -> List[str]:
        return list(self._statements_of(name, integration))

    def upload_file(self, name: str) -> None:
        self.__files.add(name)

    async def create_table(self, name: str, integration: str, select: str) -> Table:
        self._check_identifier(name, "table")
        tables = self._tables_of(integration)
        statement = sql.create_table(integration, name, select)
        if name in tables:
            raise TableAlreadyExistsError(f"Table already exists: {integration}.{name}")
        tables[name] = [statement]
        return Table(name, integration, self)

    async def create_or_replace_table(self, name: str, integration: str, select: str) -> Table:
        self._check_identifier(name, "table")
        tables = self._tables_of(integration)
        tables[name] = [sql.create_table(integration, name, select, replace=True)]
        return Table(name, integration, self)

    async def delete_table(self, name: str, integration: str) -> None:
        self._statements_of(name, integration)
        del self._tables_of(integration)[name]

    async def update_table(self, name: str, integration: str, update_query: str) -> None:
        statements = self._statements_of(name, integration)
        statements.append(sql.update_table(integration, name, update_query))

    async def insert_table(self, name: str, integration: str, select: str) -> None:
        statements = self._statements_of(name, integration)
        statements.append(sql.insert_into(integration, name, select))

    async def delete_file(self, name: str) -> None:
        self._check_identifier(name, "file")
        try:
            self.__files.remove(name)
        except KeyError as error:
            raise NoSuchFileError(f"File does not exist: {name}") from error

    async def list_tables(self, integration: str) -> List[Table]:
        return [Table(name, integration, self) for name in self._tables_of(integration)]


@pytest.fixture
def client() -> InMemoryTablesApiClient:
    return InMemoryTablesApiClient("test.in.memory.client")


def given_table(client: InMemoryTablesApiClient, name: str = TEST_TABLE_NAME) -> Table:
    return asyncio.run(client.create_table(name, TEST_INTEGRATION, TEST_SELECT))


def test_create_table(client: InMemoryTablesApiClient) -> None:
    table = given_table(client)

    assert table.name == TEST_TABLE_NAME
    assert table.integration == TEST_INTEGRATION
    assert asyncio.run(client.get_table(TEST_TABLE_NAME, TEST_INTEGRATION)) == table


def test_create_table_twice_raises_already_exists(client: InMemoryTablesApiClient) -> None:
    given_table(client)

    with pytest.raises(TableAlreadyExistsError, match="Table already exists: my_integration.sales"):
        given_table(client)


def test_create_table_in_missing_integration(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(NoSuchIntegrationError):
        asyncio.run(client.create_table(TEST_TABLE_NAME, "does_not_exist", TEST_SELECT))


def test_create_table_with_empty_select(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(InvalidStatementError):
        asyncio.run(client.create_table(TEST_TABLE_NAME, TEST_INTEGRATION, "  ; "))

    assert asyncio.run(client.list_tables(TEST_INTEGRATION)) == []


def test_create_table_with_empty_name(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(InvalidIdentifierError):
        asyncio.run(client.create_table("", TEST_INTEGRATION, TEST_SELECT))


def test_create_or_replace_table_replaces_existing(client: InMemoryTablesApiClient) -> None:
    given_table(client)

    table = asyncio.run(client.create_or_replace_table(TEST_TABLE_NAME, TEST_INTEGRATION, "SELECT id FROM raw.sales"))

    assert table == Table(TEST_TABLE_NAME, TEST_INTEGRATION, client)
    assert client.statements(TEST_TABLE_NAME, TEST_INTEGRATION) == [
        "CREATE OR REPLACE TABLE `my_integration`.`sales` (SELECT id FROM raw.sales)"
    ]


def test_create_or_replace_table_creates_missing(client: InMemoryTablesApiClient, table_name: str) -> None:
    asyncio.run(client.create_or_replace_table(table_name, TEST_INTEGRATION, TEST_SELECT))

    assert asyncio.run(client.get_table(table_name, TEST_INTEGRATION)).name == table_name


def test_delete_table_twice_raises_no_such_table(client: InMemoryTablesApiClient) -> None:
    given_table(client)
    asyncio.run(client.delete_table(TEST_TABLE_NAME, TEST_INTEGRATION))

    with pytest.raises(NoSuchTableError):
        asyncio.run(client.delete_table(TEST_TABLE_NAME, TEST_INTEGRATION))


def test_get_table_missing(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(NoSuchTableError, match="Table does not exist: my_integration.sales"):
        asyncio.run(client.get_table(TEST_TABLE_NAME, TEST_INTEGRATION))


def test_insert_into_missing_table(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(NoSuchTableError):
        asyncio.run(client.insert_table(TEST_TABLE_NAME, TEST_INTEGRATION, TEST_SELECT))

    assert asyncio.run(client.list_tables(TEST_INTEGRATION)) == []


def test_insert_table(client: InMemoryTablesApiClient) -> None:
    given_table(client)

    asyncio.run(client.insert_table(TEST_TABLE_NAME, TEST_INTEGRATION, "SELECT * FROM raw.sales_2024;"))

    assert client.statements(TEST_TABLE_NAME, TEST_INTEGRATION)[-1] == (
        "INSERT INTO `my_integration`.`sales` (SELECT * FROM raw.sales_2024)"
    )


def test_update_table(client: InMemoryTablesApiClient) -> None:
    given_table(client)

    asyncio.run(client.update_table(TEST_TABLE_NAME, TEST_INTEGRATION, "SET region = 'EU' WHERE id = 1"))

    assert client.statements(TEST_TABLE_NAME, TEST_INTEGRATION)[-1] == (
        "UPDATE `my_integration`.`sales` SET region = 'EU' WHERE id = 1"
    )


def test_delete_file(client: InMemoryTablesApiClient) -> None:
    client.upload_file("sales.csv")

    asyncio.run(client.delete_file("sales.csv"))

    with pytest.raises(NoSuchFileError):
        asyncio.run(client.delete_file("sales.csv"))


def test_delete_file_never_uploaded(client: InMemoryTablesApiClient) -> None:
    with pytest.raises(NoSuchFileError, match="File does not exist: sales.csv"):
        asyncio.run(client.delete_file("sales.csv"))


def test_remove_table_is_deprecated_delete(client: InMemoryTablesApiClient) -> None:
    given_table(client)

    with pytest.deprecated_call():
        asyncio.run(client.remove_table(TEST_TABLE_NAME, TEST_INTEGRATION))

    with pytest.raises(NoSuchTableError):
        asyncio.run(client.get_table(TEST_TABLE_NAME, TEST_INTEGRATION))


def test_concurrent_creates_of_the_same_table(client: InMemoryTablesApiClient) -> None:
    async def create_twice() -> List[object]:
        return await asyncio.gather(
            client.create_table(TEST_TABLE_NAME, TEST_INTEGRATION, TEST_SELECT),
            client.create_table(TEST_TABLE_NAME, TEST_INTEGRATION, TEST_SELECT),
            return_exceptions=True,
        )

    results = asyncio.run(create_twice())

    assert sum(isinstance(result, Table) for result in results) == 1
    assert sum(isinstance(result, TableAlreadyExistsError) for result in results) == 1


def test_sales_scenario(client: InMemoryTablesApiClient) -> None:
    table = asyncio.run(client.create_table("sales", "my_integration", "SELECT * FROM raw.sales"))
    assert table.name == "sales"

    assert asyncio.run(client.update_table("sales", "my_integration", "ALTER TABLE sales ADD COLUMN region TEXT")) is None
    assert asyncio.run(client.delete_table("sales", "my_integration")) is None

    with pytest.raises(NoSuchTableError):
        asyncio.run(client.delete_table("sales", "my_integration"))
