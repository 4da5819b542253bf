"""
The Censys API credential type
"""
import logging
import os

from .core import CensysApiAccessObject, CensysConfigurationException, HttpMethod

LOGGER = logging.getLogger(__name__)
"""The logger for this module"""


class CensysApiCredentials(object):
    """
    The credential type for the Censys Search API.

    The API ID and secret are sent as the HTTP Basic username and password respectively.  Instances are immutable; use
    'from_env' to build one from the CENSYS_API_ID and CENSYS_API_SECRET environment variables.
    """

    name = "censysApi"
    display_name = "Censys API"
    documentation_url = "https://search.censys.io/account/api"

    properties = (
        {
            "displayName": "API ID",
            "name": "apiId",
            "type": "string",
            "required": True,
            "default": "",
            "description": "Your Censys API ID",
        },
        {
            "displayName": "API Secret",
            "name": "apiSecret",
            "type": "string",
            "typeOptions": {"password": True},
            "required": True,
            "default": "",
            "description": "Your Censys API Secret",
        },
    )
    """The credential fields presented to the user"""

    TEST_PATH = "/v1/account"
    """The endpoint used to check that a credential pair is accepted"""

    def __init__(self, api_id, api_secret):
        self._api_id = api_id
        self._api_secret = api_secret

    @classmethod
    def from_env(cls):
        """
        Create credentials from the CENSYS_API_ID and CENSYS_API_SECRET environment variables.

        :return: A new credentials object (possibly incomplete; see 'validate')
        """
        return cls(os.environ.get("CENSYS_API_ID"), os.environ.get("CENSYS_API_SECRET"))

    @classmethod
    def from_dict(cls, values):
        """
        Create credentials from a host-style mapping ({"apiId": ..., "apiSecret": ...}).

        :param values: The mapping, or None
        :return: A new credentials object (possibly incomplete; see 'validate')
        """
        values = values or {}
        return cls(values.get("apiId"), values.get("apiSecret"))

    @property
    def api_id(self):
        return self._api_id

    @property
    def api_secret(self):
        return self._api_secret

    def validate(self):
        """
        Check that both the API ID and the API secret are present.

        :return: This object
        :raises CensysConfigurationException: If either value is missing or empty
        """
        if not self._api_id or not self._api_secret:
            msg = "No valid credentials provided!"
            LOGGER.error("%s (API ID set: %s, API secret set: %s)", msg, bool(self._api_id), bool(self._api_secret))
            raise CensysConfigurationException(msg)
        return self

    def authenticate(self, session):
        """
        Apply HTTP Basic authentication to a requests session.

        :param session: The requests Session
        :return: The same session
        """
        session.auth = (self._api_id, self._api_secret)
        return session

    def test(self, transport=None):
        """
        Check the credentials against the account endpoint.

        :param transport: An object with a 'request' method, or None to use a new CensysApiAccessObject
        :return: True if the API accepted the credentials
        :raises CensysConfigurationException: If the credentials are incomplete
        :raises CensysResultException: If the API rejected the request
        """
        self.validate()
        if transport is None:
            with CensysApiAccessObject(self._api_id, self._api_secret) as api:
                return self.test(api)
        account = transport.request(HttpMethod.GET, self.TEST_PATH)
        LOGGER.debug("Censys credentials accepted for account: %s", account.get("login") if account else None)
        return True

    def __repr__(self):
        # never include the secret
        return "%s(api_id=%r)" % (type(self).__name__, self._api_id)
