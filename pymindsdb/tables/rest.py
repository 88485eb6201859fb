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
import asyncio
import logging
import re
from typing import (
    Any,
    Dict,
    List,
    Literal,
    Optional,
    Type,
)

from pydantic import Field, ValidationError
from requests import HTTPError, JSONDecodeError, Session

from pymindsdb import __version__, sql
from pymindsdb.exceptions import (
    AuthorizationExpiredError,
    BadRequestError,
    ForbiddenError,
    InvalidStatementError,
    MindsDBError,
    NoSuchFileError,
    NoSuchIntegrationError,
    NoSuchTableError,
    RESTError,
    ServerError,
    ServiceUnavailableError,
    TableAlreadyExistsError,
    UnauthorizedError,
)
from pymindsdb.table import Table
from pymindsdb.tables import (
    DATABASE,
    DEFAULT_DATABASE,
    PASSWORD,
    TOKEN,
    URI,
    USER,
    TablesApiClient,
)
from pymindsdb.typedef import MindsDBBaseModel

logger = logging.getLogger(__name__)


class Endpoints:
    login: str = "api/login"
    sql_query: str = "api/sql/query"


AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer"
KEY = "key"
CERT = "cert"
CLIENT = "client"
CA_BUNDLE = "cabundle"
SSL = "ssl"

_SUBJECT_KINDS = r"(?P<kind>table|file|database|integration|project)"
# "Table 'sales' already exists", the subject directly precedes the phrase
_ALREADY_EXISTS = re.compile(rf"\b{_SUBJECT_KINDS}(?:\s+\S+)?\s+already exists", re.IGNORECASE)
# "Table 'sales' does not exist", "Database not found: foo"
_MISSING = re.compile(
    rf"\b{_SUBJECT_KINDS}(?:\s+\S+)?\s+(?:does not exist|doesn't exist|not found|cannot be found)", re.IGNORECASE
)
# "Unknown table 'sales'", "no such table: sales"
_UNKNOWN = re.compile(rf"\b(?:unknown|no such|can't find|cannot find)\s+{_SUBJECT_KINDS}\b", re.IGNORECASE)
_TABLE_KINDS = {"table", "file"}


class SqlQueryRequest(MindsDBBaseModel):
    query: str = Field()
    context: Dict[str, str] = Field(default_factory=dict)


class SqlQueryResponse(MindsDBBaseModel):
    type: Literal["ok", "table", "error"] = Field()
    column_names: List[str] = Field(default_factory=list)
    data: List[List[Any]] = Field(default_factory=list)
    error_code: Optional[int] = Field(default=None)
    error_message: Optional[str] = Field(default=None)


class ErrorResponse(MindsDBBaseModel):
    title: Optional[str] = Field(default=None)
    detail: Optional[str] = Field(default=None)
    message: Optional[str] = Field(default=None)


class RestTablesApiClient(TablesApiClient):
    uri: str
    _session: Session

    def __init__(self, name: str, **properties: str):
        """Rest client for the table operations of a MindsDB server.

        Either an API token is provided, or a user and password to log in with.
        Without either, the server is expected to run without authentication.

        Args:
            name: Name to identify the client.
            properties: Properties that are passed along to the configuration.
        """
        super().__init__(name, **properties)
        self.uri = properties[URI]
        self._session = self._create_session()

    @property
    def session(self) -> Session:
        return self._session

    def _create_session(self) -> Session:
        """Creates a request session with provided client configuration."""
        session = Session()

        # Sets the client side and server side SSL cert verification, if provided as properties.
        if ssl_config := self.properties.get(SSL):
            if ssl_ca_bundle := ssl_config.get(CA_BUNDLE):  # type: ignore
                session.verify = ssl_ca_bundle
            if ssl_client := ssl_config.get(CLIENT):  # type: ignore
                if all(k in ssl_client for k in (CERT, KEY)):
                    session.cert = (ssl_client[CERT], ssl_client[KEY])
                elif ssl_client_cert := ssl_client.get(CERT):
                    session.cert = ssl_client_cert

        session.headers["Content-type"] = "application/json"
        session.headers["User-Agent"] = f"pymindsdb/{__version__}"

        if token := self.properties.get(TOKEN):
            session.headers[AUTHORIZATION_HEADER] = f"{BEARER_PREFIX} {token}"
        elif USER in self.properties and PASSWORD in self.properties:
            # The session cookie is kept by the session for subsequent calls
            self._login(session, self.properties[USER], self.properties[PASSWORD])

        return session

    def url(self, endpoint: str) -> str:
        """Constructs the endpoint.

        Args:
            endpoint: Resource identifier that points to the server.

        Returns:
            The full url of the endpoint.
        """
        url = self.uri if self.uri.endswith("/") else self.uri + "/"
        return url + endpoint

    def _login(self, session: Session, user: str, password: str) -> None:
        logger.info("Logging in to %s as %s", self.uri, user)
        response = session.post(self.url(Endpoints.login), json={"username": user, "password": password})
        try:
            response.raise_for_status()
        except HTTPError as exc:
            self._handle_non_200_response(exc, {})

    def _handle_non_200_response(self, exc: HTTPError, error_handler: Dict[int, Type[Exception]]) -> None:
        exception: Type[Exception]
        code = exc.response.status_code
        if code in error_handler:
            exception = error_handler[code]
        elif code == 400:
            exception = BadRequestError
        elif code == 401:
            exception = UnauthorizedError
        elif code == 403:
            exception = ForbiddenError
        elif code == 419:
            exception = AuthorizationExpiredError
        elif code == 503:
            exception = ServiceUnavailableError
        elif 500 <= code < 600:
            exception = ServerError
        else:
            exception = RESTError

        try:
            error = ErrorResponse(**exc.response.json())
            if error.title and error.detail:
                response = f"{error.title}: {error.detail}"
            else:
                response = error.detail or error.message or error.title or f"RESTError {code}: {exc.response.text}"
        except JSONDecodeError:
            # In the case we don't have a proper response
            response = f"RESTError {code}: Could not decode json payload: {exc.response.text}"
        except (ValidationError, TypeError):
            response = f"RESTError {code}: Received unexpected JSON Payload: {exc.response.text}"

        raise exception(response) from exc

    @staticmethod
    def _raise_sql_error(
        response: SqlQueryResponse,
        conflict: Optional[Type[MindsDBError]] = None,
        missing: Type[MindsDBError] = NoSuchTableError,
        missing_integration: Type[MindsDBError] = NoSuchIntegrationError,
    ) -> None:
        """Turns an error reported by the server for a statement into an exception.

        Only a conflict or a missing object that is the table, file or integration itself
        is reported as such. Errors about columns, values or syntax are invalid statements.
        """
        message = response.error_message or f"SQL error {response.error_code}"
        exception: Type[MindsDBError] = InvalidStatementError
        if conflict is not None and (match := _ALREADY_EXISTS.search(message)) and match.group("kind").lower() in _TABLE_KINDS:
            exception = conflict
        elif match := _MISSING.search(message) or _UNKNOWN.search(message):
            exception = missing if match.group("kind").lower() in _TABLE_KINDS else missing_integration
        raise exception(message)

    def _execute(
        self,
        statement: str,
        error_handler: Optional[Dict[int, Type[Exception]]] = None,
        **error_kinds: Optional[Type[MindsDBError]],
    ) -> SqlQueryResponse:
        logger.debug("Executing statement on %s: %s", self.uri, statement)
        request = SqlQueryRequest(query=statement, context={"db": self.properties.get(DATABASE, DEFAULT_DATABASE)})
        response = self._session.post(self.url(Endpoints.sql_query), data=request.model_dump_json().encode("utf-8"))
        try:
            response.raise_for_status()
        except HTTPError as exc:
            self._handle_non_200_response(exc, error_handler or {})

        try:
            query_response = SqlQueryResponse(**response.json())
        except (JSONDecodeError, ValidationError, TypeError) as exc:
            raise RESTError(f"Received unexpected payload for statement {statement!r}: {response.text}") from exc

        if query_response.type == "error":
            self._raise_sql_error(query_response, **error_kinds)  # type: ignore
        return query_response

    async def _query(
        self,
        statement: str,
        error_handler: Optional[Dict[int, Type[Exception]]] = None,
        **error_kinds: Optional[Type[MindsDBError]],
    ) -> SqlQueryResponse:
        # requests is blocking, keep it off the event loop
        return await asyncio.to_thread(self._execute, statement, error_handler, **error_kinds)

    async def create_table(self, name: str, integration: str, select: str) -> Table:
        self._check_identifier(name, "table")
        self._check_identifier(integration, "integration")
        await self._query(
            sql.create_table(integration, name, select),
            {404: NoSuchIntegrationError, 409: TableAlreadyExistsError},
            conflict=TableAlreadyExistsError,
        )
        return Table(name, integration, self)

    async def create_or_replace_table(self, name: str, integration: str, select: str) -> Table:
        self._check_identifier(name, "table")
        self._check_identifier(integration, "integration")
        await self._query(sql.create_table(integration, name, select, replace=True), {404: NoSuchIntegrationError})
        return Table(name, integration, self)

    async def delete_table(self, name: str, integration: str) -> None:
        self._check_identifier(name, "table")
        self._check_identifier(integration, "integration")
        await self._query(sql.drop_table(integration, name), {404: NoSuchTableError})

    async def update_table(self, name: str, integration: str, update_query: str) -> None:
        self._check_identifier(name, "table")
        self._check_identifier(integration, "integration")
        await self._query(sql.update_table(integration, name, update_query), {404: NoSuchTableError})

    async def insert_table(self, name: str, integration: str, select: str) -> None:
        self._check_identifier(name, "table")
        self._check_identifier(integration, "integration")
        await self._query(sql.insert_into(integration, name, select), {404: NoSuchTableError})

    async def delete_file(self, name: str) -> None:
        self._check_identifier(name, "file")
        await self._query(
            sql.drop_file(name), {404: NoSuchFileError}, missing=NoSuchFileError, missing_integration=NoSuchFileError
        )

    async def list_tables(self, integration: str) -> List[Table]:
        self._check_identifier(integration, "integration")
        response = await self._query(
            sql.show_tables(integration),
            {404: NoSuchIntegrationError},
            missing=NoSuchIntegrationError,
            missing_integration=NoSuchIntegrationError,
        )
        return [Table(str(row[0]), integration, self) for row in response.data if row]

    def close(self) -> None:
        self._session.close()

    async def __aenter__(self) -> "RestTablesApiClient":
        """Returns the client itself, the session is closed on exit."""
        return self

    async def __aexit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        """Closes the underlying session."""
        self.close()
