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
"""SQL string builders for the table operations.

Every builder returns a complete statement. Identifiers are backtick quoted,
statements handed in by the caller are only trimmed, never parsed.
"""
import re

from pymindsdb.exceptions import InvalidStatementError

FILES_INTEGRATION = "files"

_COMPLETE_UPDATE = re.compile(r"^(UPDATE|ALTER|WITH)\b", re.IGNORECASE)
_TRAILING = re.compile(r"[\s;]+$")


def quote_identifier(identifier: str) -> str:
    """Quotes an identifier with backticks, doubling any backtick inside it."""
    return "`" + identifier.replace("`", "``") + "`"


def qualified_name(integration: str, name: str) -> str:
    return f"{quote_identifier(integration)}.{quote_identifier(name)}"


def normalize_statement(statement: str) -> str:
    """Strips surrounding whitespace and trailing semicolons from a statement.

    Raises:
        InvalidStatementError: If nothing is left of the statement.
    """
    normalized = _TRAILING.sub("", (statement or "").strip())
    if not normalized:
        raise InvalidStatementError(f"Empty SQL statement: {statement!r}")
    return normalized


def create_table(integration: str, name: str, select: str, replace: bool = False) -> str:
    """CREATE [OR REPLACE] TABLE `integration`.`name` (select)."""
    verb = "CREATE OR REPLACE TABLE" if replace else "CREATE TABLE"
    return f"{verb} {qualified_name(integration, name)} ({normalize_statement(select)})"


def drop_table(integration: str, name: str) -> str:
    return f"DROP TABLE {qualified_name(integration, name)}"


def insert_into(integration: str, name: str, select: str) -> str:
    """INSERT INTO `integration`.`name` (select)."""
    return f"INSERT INTO {qualified_name(integration, name)} ({normalize_statement(select)})"


def update_table(integration: str, name: str, update_query: str) -> str:
    """Builds the statement that updates a table.

    A complete statement (UPDATE, ALTER or WITH ... UPDATE) is passed through as-is.
    Anything else is taken as the clause following the table name, for example
    ``SET region = 'EU' WHERE id = 1``.
    """
    statement = normalize_statement(update_query)
    if _COMPLETE_UPDATE.match(statement):
        return statement
    return f"UPDATE {qualified_name(integration, name)} {statement}"


def drop_file(name: str) -> str:
    return drop_table(FILES_INTEGRATION, name)


def show_tables(integration: str) -> str:
    return f"SHOW TABLES FROM {quote_identifier(integration)}"
