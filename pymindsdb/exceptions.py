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


class MindsDBError(Exception):
    """Base class for every failure raised while talking to a MindsDB server"""


class NoSuchTableError(MindsDBError):
    """Raised when a referenced table is not found"""


class NoSuchIntegrationError(MindsDBError):
    """Raised when a referenced integration is not found"""


class NoSuchFileError(MindsDBError):
    """Raised when a referenced file is not found in the files integration"""


class TableAlreadyExistsError(MindsDBError):
    """Raised when creating a table with a name that already exists in the integration"""


class InvalidStatementError(MindsDBError):
    """Raised when the server rejects a SQL statement, or the statement is empty"""


class InvalidIdentifierError(MindsDBError):
    """Raised when a table, integration or file name is empty"""


class RESTError(MindsDBError):
    """Raises when there is an unknown response from the REST server"""


class BadRequestError(RESTError):
    """Raises when an invalid request is being made"""


class UnauthorizedError(RESTError):
    """Raises when you don't have the proper authorization"""


class ForbiddenError(RESTError):
    """Raises when you don't have the credentials to perform the action on the server"""


class AuthorizationExpiredError(RESTError):
    """When the session has expired, and the client has to log in again"""


class ServiceUnavailableError(RESTError):
    """Raises when the service doesn't respond"""


class ServerError(RESTError):
    """Raises when there is an unhandled exception on the server side"""
