"""
The api/client module serves as the single entry point of all apis, holding
information such as the server url and the access token, as well as caching
runtime objects such as http sessions.
"""

import threading
from typing import Any, Dict, Optional

import requests
from loguru import logger

from secretserver import config

# import the related API resources. Note that in all these files, they should
# not import client to avoid circular imports.
from .api_resource import raise_if_not_ok
from .secret import SecretAPI
from .utils import AuthenticationError, Configuration, get_base_url


class APIClient(object):
    """
    A Secret Server API client. This class holds the connection and the
    credentials, and all the apis callable by the user, e.g.

        client = APIClient()
        secret = client.secret.get(42)
        password, ok = secret.field("password")
    """

    def __init__(self, configuration: Optional[Configuration] = None):
        """
        Creates an api client. If no configuration is given, it is read from the
        TSS_USERNAME, TSS_PASSWORD, TSS_TENANT, TSS_TLD and TSS_SERVER_URL
        environment variables. The access token is not requested until the first
        api call.
        """
        self.configuration = configuration or Configuration.from_env()
        self.url: str = get_base_url(self.configuration)

        self._access_token: Optional[str] = None
        self._token_lock = threading.Lock()
        # In default, timeout for the API calls is set to 120 seconds.
        self._timeout = config.DEFAULT_TIMEOUT
        self._session = requests.Session()

        # Add individual APIs
        self.secret = SecretAPI(self)

    def _safe_add(self, kwargs: Dict) -> Dict:
        """
        Internal utility function to add default values to the kwargs.
        """
        kwargs.setdefault("headers", {})
        kwargs.setdefault("timeout", self._timeout)
        kwargs["headers"].setdefault("Authorization", "Bearer " + self.token())
        return kwargs

    def _get(self, path: str, *args, **kwargs):
        return self._session.get(self.url + path, *args, **self._safe_add(kwargs))

    def _post(self, path: str, *args, **kwargs):
        return self._session.post(self.url + path, *args, **self._safe_add(kwargs))

    def _put(self, path: str, *args, **kwargs):
        return self._session.put(self.url + path, *args, **self._safe_add(kwargs))

    def _delete(self, path: str, *args, **kwargs):
        return self._session.delete(self.url + path, *args, **self._safe_add(kwargs))

    def token(self, refresh: bool = False) -> str:
        """
        Returns the access token, requesting one with the password grant if there
        is none yet or if refresh is set.
        """
        with self._token_lock:
            if self._access_token is None or refresh:
                self._access_token = self._request_token()
            return self._access_token

    def _request_token(self) -> str:
        credentials = self.configuration.credentials
        logger.debug(f"Requesting an access token for '{credentials.username}'")
        response = self._session.post(
            self.url + config.TOKEN_PATH_URI,
            data={
                "grant_type": "password",
                "username": credentials.username,
                "password": credentials.password,
            },
            timeout=self._timeout,
        )
        if not response.ok:
            raise AuthenticationError(
                f"Unable to get an access token: {response.status_code}"
                f" {response.text}",
                server_url=self.url,
                username=credentials.username,
                status_code=response.status_code,
            )
        try:
            token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError):
            raise AuthenticationError(
                "The token endpoint did not return an access token.",
                server_url=self.url,
                username=credentials.username,
                status_code=response.status_code,
            )
        if not token:
            raise AuthenticationError(
                "The token endpoint returned an empty access token.",
                server_url=self.url,
                username=credentials.username,
                status_code=response.status_code,
            )
        return token

    def access(
        self,
        method: str,
        resource: str,
        path: Optional[str] = None,
        body: Optional[Any] = None,
    ) -> bytes:
        """
        Performs an authenticated request against the given resource and returns
        the raw response body.

        :param str method: one of GET, POST, PUT, DELETE
        :param str resource: the resource name, e.g. "secrets"
        :param str path: the identifier path below the resource, e.g. "42" or
            "42/fields/private-key". It may carry a query string.
        :param body: a JSON serializable request body
        :return: the response body
        :raises TransportError: if the server returns a non-success status
        """
        senders = {
            "GET": self._get,
            "POST": self._post,
            "PUT": self._put,
            "DELETE": self._delete,
        }
        sender = senders.get(method.upper())
        if sender is None:
            raise ValueError(f"Unsupported method: {method}")

        url_path = f"{config.API_PATH_URI}/{resource}"
        if path:
            url_path += f"/{path}"
        kwargs = {} if body is None else {"json": body}

        response = sender(url_path, **kwargs)
        if response.status_code == 401:
            # The token may have expired; get a new one and try once more.
            logger.debug(f"{method} {url_path} was unauthorized, refreshing token")
            self.token(refresh=True)
            response = sender(url_path, **kwargs)
        raise_if_not_ok(response)
        return response.content
