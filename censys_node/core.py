"""
Core functionality for the Censys node package
"""
import enum
import json
import logging
import os

import requests


LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


@enum.unique
class HttpMethod(enum.Enum):
    """
    An enumeration of HTTP methods used by the Censys v2 endpoints
    """

    GET = "GET"
    """The HTTP GET method"""

    POST = "POST"
    """The HTTP POST method"""

    PUT = "PUT"
    """The HTTP PUT method"""

    DELETE = "DELETE"
    """The HTTP DELETE method"""


class CensysResult(object):
    """
    A base class for results from a Censys API call
    """

    def __init__(self, code, raw):
        """
        Create a new result object.

        :param code: The HTTP status code returned from the API
        :param raw: The decoded response JSON returned by the API (an empty dictionary for empty bodies)
        """
        self._code = code
        self._raw = raw

    @property
    def code(self):
        """
        Get the HTTP status code returned from the API.

        :return: The HTTP status code
        """
        return self._code

    @property
    def raw(self):
        """
        Get the decoded response JSON returned by the API.

        :return: The decoded response JSON
        """
        return self._raw

    def __repr__(self):
        return "%s(%s, %s)" % (type(self).__name__, self.code, self.raw)

    def __str__(self):
        return CensysResult.__repr__(self)


class ErrorResult(CensysResult):
    """
    An error response from a Censys API call.

    The v2 API reports errors as {"code": ..., "status": ..., "error": ...}; older endpoints (such as /v1/account) use
    "error_code" instead of "code".  Bodies that are not JSON objects fall back to the HTTP reason phrase.
    """

    def __init__(self, code, raw, reason=None):
        """
        Create a new error response.

        :param code: The HTTP status code
        :param raw: The decoded response JSON from the API
        :param reason: The HTTP reason phrase, used when the body carries no error message
        """
        super(ErrorResult, self).__init__(code, raw)
        message = None
        if isinstance(raw, dict):
            error_code = raw.get("error_code", raw.get("code"))
            if isinstance(error_code, int) and error_code != code:
                LOGGER.warning("Response status code (%d) does not match error code in response content (%d)",
                               code,
                               error_code)
            message = raw.get("error") or raw.get("status")
        self._message = message or reason or "Unknown error"

    @property
    def message(self):
        """
        Get the error message for this result.

        :return: The error message
        """
        return self._message

    def __str__(self):
        # Example: "(403): Unauthorized.  You must authenticate with an API ID and secret."
        return "(%d): %s" % (self.code, self.message)


class CensysException(Exception):
    """
    The base class for all exceptions thrown by the Censys node package.
    """
    pass


class CensysConfigurationException(CensysException):
    """
    Raised when the node is not configured well enough to attempt any request (e.g. missing credentials).

    This is never recorded as a per-item failure.
    """
    pass


class UnknownOperationException(CensysException):
    """
    Raised when an operation tag does not name a registered operation.
    """

    def __init__(self, operation):
        self.operation = operation
        super(UnknownOperationException, self).__init__("Unknown operation: %s" % operation)


class MissingParameterException(CensysException):
    """
    Raised when a required operation parameter resolves to an empty value.
    """

    def __init__(self, operation, parameter):
        self.operation = operation
        self.parameter = parameter
        super(MissingParameterException, self).__init__(
            "Missing required parameter '%s' for operation %s" % (parameter, operation))


class CensysTransportException(CensysException):
    """
    Raised when a request could not be completed at all (connection failure, timeout, undecodable body).
    """
    pass


class CensysResultException(CensysException):
    """
    The base class for exceptions resulting from error responses from a Censys API call.

    Exceptions of this type mean that actually calling the API was successful, but the API returned an error response.
    As a result, the constructor for this exception takes an ErrorResult instance to construct the exception, which has
    both a code and message property.
    """

    def __init__(self, error_result):
        """
        Create a new exception.

        :param error_result: The ErrorResult instance
        """
        self._code = error_result.code
        self._message = error_result.message
        self._result = error_result
        message = "Error (%d): %s" % (error_result.code, error_result.message)
        super(CensysResultException, self).__init__(message)

    @property
    def code(self):
        """
        Get the error code returned from the Censys API.

        :return: The error code
        """
        return self._code

    @property
    def message(self):
        """
        Get the error detail message returned from the Censys API.

        :return: The error detail message
        """
        return self._message

    @property
    def result(self):
        """
        Get the ErrorResult this exception was raised for.

        :return: The ErrorResult
        """
        return self._result

    def __str__(self):
        # Example: "(403): Unauthorized.  You must authenticate with an API ID and secret."
        return "(%d): %s" % (self.code, self.message)


class CensysApiAccessObject(object):
    """
    Authenticated HTTP access to the Censys Search API.

    This is the transport the node dispatches through: every call is a single request against BASE_URL using HTTP Basic
    authentication.  No retries and no pagination are performed here.

    By default, new objects use the default timeout and try to obtain the API ID and API secret value from OS
    environment variables (CENSYS_API_ID and CENSYS_API_SECRET, respectively).  Users may override these values through
    the constructor; they are fixed for the lifetime of the object.

    Censys API access objects should be closed when no longer in use.  They support use in with statements but may also
    be closed via the 'close' method.
    """

    BASE_URL = "https://search.censys.io/api"
    """The base URL for the Censys Search API"""

    DEFAULT_TIMEOUT = 30000
    """The default timeout for calls to the Censys REST API, in milliseconds"""

    def __init__(self, api_id=None, api_secret=None, base_url=None, timeout=None):
        """
        Create a new API access object.

        :param api_id: The API ID (defaults to the CENSYS_API_ID environment variable)
        :param api_secret: The API secret (defaults to the CENSYS_API_SECRET environment variable)
        :param base_url: The base URL (defaults to BASE_URL)
        :param timeout: The default timeout in milliseconds (defaults to DEFAULT_TIMEOUT)
        """
        self._api_id = api_id if api_id is not None else os.environ.get("CENSYS_API_ID", None)
        self._api_secret = api_secret if api_secret is not None else os.environ.get("CENSYS_API_SECRET", None)
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """
        Close this API access object.

        :return: This method returns no values
        """
        if self._session is not None:
            self._session.close()
            self._session = None

    @property
    def base_url(self):
        """
        Get the base URL requests are made against.

        :return: The base URL, without a trailing slash
        """
        return self._base_url

    @property
    def timeout(self):
        """
        Get the default timeout used when accessing the Censys API.

        :return: The timeout, in milliseconds
        """
        return self._timeout

    @timeout.setter
    def timeout(self, value):
        """
        Set the default timeout to be used when accessing the Censys API.

        :param value: The timeout, in milliseconds
        :return: This method returns no values
        """
        self._timeout = value
        LOGGER.debug("Default Censys timeout is now %s ms", self._timeout)

    @property
    def api_id(self):
        """
        Get the API ID used to access the Censys API.

        :return: The API ID (a string or None)
        """
        return self._api_id

    @property
    def api_secret(self):
        """
        Get the API secret value used to access the Censys API.

        :return: The API secret value (a string or None)
        """
        return self._api_secret

    def request(self, method, path, params=None, data=None, timeout=None):
        """
        Perform one authenticated call to the Censys API and return the decoded JSON.

        :param method: The HttpMethod enumeration instance identifying what method should be used
        :param path: The path relative to the base URL (must start with "/"), already percent-encoded
        :param params: A dictionary of query parameters, or None for no query parameters
        :param data: A dictionary sent as the JSON body, or None for no body
        :param timeout: The timeout in milliseconds, or None to use the default timeout
        :return: The decoded response JSON (an empty dictionary for empty bodies)
        :raises CensysResultException: If the API returned a non-2xx response
        :raises CensysTransportException: If the request could not be completed
        """
        result = self._do_call(method, path, params=params, data=data, timeout=timeout)
        if isinstance(result, ErrorResult):
            raise CensysResultException(result)
        return result.raw

    def _do_call(self, method, path, params=None, data=None, timeout=None):
        """
        Perform the actual call to the Censys API.

        :param method: The HttpMethod enumeration instance
        :param path: The path relative to the base URL
        :param params: A dictionary of query parameters (None or an empty dictionary for no query parameters)
        :param data: A dictionary of the data to be passed as a JSON body, or None for no data
        :param timeout: The timeout in milliseconds, or None for the default
        :return: A CensysResult object (an ErrorResult for non-2xx responses)
        :raises ValueError: If 'method' is not a supported HTTP method
        :raises CensysTransportException: If the request could not be completed
        """
        if not isinstance(method, HttpMethod):
            msg = "Invalid/Unsupported HTTP method: %s" % method
            LOGGER.error(msg)
            raise ValueError(msg)
        self._check_session()
        params = params or dict()
        body = None if data is None else json.dumps(data)
        url = self._make_url(path)
        seconds = (timeout or self.timeout) / 1000.0
        LOGGER.debug("Censys call: %s %s (params: %s, body: %s, timeout: %ss)", method.value, url, params, body, seconds)
        try:
            response = self._session.request(method.value, url, params=params, data=body, timeout=seconds)
        except requests.Timeout as e:
            LOGGER.warning("Censys call timed out after %ss: %s %s", seconds, method.value, url)
            raise CensysTransportException("Request timed out after %d ms" % (seconds * 1000)) from e
        except requests.RequestException as e:
            LOGGER.warning("Censys call failed: %s %s (%s)", method.value, url, e)
            raise CensysTransportException(str(e)) from e
        code = response.status_code
        response_json = self._decode(response)
        LOGGER.debug("Censys call responded %d:\n%s", code, response_json)
        if 200 <= code < 300:
            return CensysResult(code, response_json)
        LOGGER.warning("Censys error response: %s", response_json)
        return ErrorResult(code, response_json, response.reason)

    @staticmethod
    def _decode(response):
        """
        Decode a response body, treating an empty body as an empty dictionary.

        :param response: The requests Response object
        :return: The decoded JSON
        :raises CensysTransportException: If a successful response has a non-JSON body
        """
        if not response.content:
            return dict()
        try:
            return response.json()
        except ValueError as e:
            if 200 <= response.status_code < 300:
                raise CensysTransportException("Response is not valid JSON: %s" % e) from e
            return dict()

    def _make_url(self, path):
        """
        Create the URL for accessing the Censys API.

        :param path: The endpoint path
        :return: The URL for accessing the Censys API
        """
        url = self.base_url + path
        LOGGER.debug("Created Censys URL: %s", url)
        return url

    def _check_session(self):
        """
        Ensure that the internal session is ready for use.

        The session is created on first use (or after 'close') and is then available via the self._session member.

        :return: This method returns no values
        """
        if self._session is None:
            self._session = self._make_session()

    def _make_session(self):
        """
        Create a new Requests session object.

        :return: The new session object
        """
        session = requests.Session()
        session.auth = (self.api_id, self.api_secret)
        session.headers.update({"accept": "application/json", "content-type": "application/json"})
        return session
