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

from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    from pymindsdb.tables import TablesApiClient


class Table:
    """A table inside an integration, bound to the client that created or loaded it.

    The table-scoped operations delegate to that client, so a table handed out by a
    REST client talks to the same server.
    """

    name: str
    integration: str
    client: TablesApiClient

    def __init__(self, name: str, integration: str, client: TablesApiClient) -> None:
        self.name = name
        self.integration = integration
        self.client = client

    def identifier(self) -> Tuple[str, str]:
        """Return the (integration, name) pair identifying this table."""
        return self.integration, self.name

    async def refresh(self) -> Table:
        """Check that the table still exists on the server.

        Raises:
            NoSuchTableError: If the table has been dropped in the meantime.
        """
        return await self.client.get_table(self.name, self.integration)

    async def update(self, update_query: str) -> None:
        await self.client.update_table(self.name, self.integration, update_query)

    async def insert(self, select: str) -> None:
        await self.client.insert_table(self.name, self.integration, select)

    async def delete(self) -> None:
        await self.client.delete_table(self.name, self.integration)

    def __eq__(self, other: Any) -> bool:
        """Return the equality of two instances of the Table class."""
        return self.identifier() == other.identifier() if isinstance(other, Table) else False

    def __hash__(self) -> int:
        return hash(self.identifier())

    def __repr__(self) -> str:
        """Return the string representation of the Table class."""
        return f"Table(name={self.name!r}, integration={self.integration!r})"
