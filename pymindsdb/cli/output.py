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
import json
from abc import ABC, abstractmethod
from typing import Any, List

from rich.console import Console
from rich.table import Table as RichTable

from pymindsdb.table import Table


class Output(ABC):
    """Output interface for exporting"""

    @abstractmethod
    def exception(self, ex: Exception) -> None:
        ...

    @abstractmethod
    def tables(self, tables: List[Table]) -> None:
        ...

    @abstractmethod
    def describe_table(self, table: Table) -> None:
        ...

    @abstractmethod
    def text(self, response: str) -> None:
        ...


class ConsoleOutput(Output):
    """Writes to the console"""

    def __init__(self, **properties: Any):
        self.verbose = properties.get("verbose", False)

    @property
    def _table(self) -> RichTable:
        return RichTable.grid(padding=(0, 2))

    def exception(self, ex: Exception) -> None:
        if self.verbose:
            Console(stderr=True).print_exception()
        else:
            Console(stderr=True).print(ex)

    def tables(self, tables: List[Table]) -> None:
        output_table = self._table
        for table in tables:
            output_table.add_row(".".join(table.identifier()))

        Console().print(output_table)

    def describe_table(self, table: Table) -> None:
        output_table = self._table
        output_table.add_row("Integration", table.integration)
        output_table.add_row("Table", table.name)
        Console().print(output_table)

    def text(self, response: str) -> None:
        Console().print(response)


class JsonOutput(Output):
    """Writes json to stdout"""

    def __init__(self, **properties: Any):
        self.verbose = properties.get("verbose", False)

    def _out(self, d: Any) -> None:
        print(json.dumps(d))

    def exception(self, ex: Exception) -> None:
        self._out({"type": ex.__class__.__name__, "message": str(ex)})

    def tables(self, tables: List[Table]) -> None:
        self._out([".".join(table.identifier()) for table in tables])

    def describe_table(self, table: Table) -> None:
        self._out({"integration": table.integration, "name": table.name})

    def text(self, response: str) -> None:
        self._out(response)
