"""
Utility functions and configuration types for the Secret Server API.
"""

import os
from typing import Optional

from pydantic import BaseModel

from secretserver import config


class SecretServerError(RuntimeError):
    def __init__(self, message, server_url=None, username=None):
        super().__init__(message)
        self.server_url = server_url
        self.username = username

    def __str__(self):
        details = ", ".join(
            f"{key.replace('_', ' ').title()}: {value}"
            for key, value in vars(self).items()
            if value and key != "args"
        )
        return f"{self.args[0]} ({details})" if details else self.args[0]


class ServerConfigurationError(SecretServerError):
    """
    Raised when the configuration does not identify a server, e.g. when neither
    a tenant nor a server url is given.
    """


class AuthenticationError(SecretServerError):
    """
    Raised when the token endpoint refuses the credentials or does not return
    an access token.
    """

    def __init__(self, message, server_url=None, username=None, status_code=None):
        super().__init__(message, server_url, username)
        self.status_code = status_code


class UserCredential(BaseModel):
    username: str = ""
    password: str = ""


class Configuration(BaseModel):
    """
    Settings used by the APIClient to reach and authenticate against a server.
    Either tenant (for the cloud offering) or server_url (for an on-premise
    installation) must be set. If both are set, server_url wins.
    """

    credentials: UserCredential = UserCredential()
    server_url: Optional[str] = None
    tenant: Optional[str] = None
    tld: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Configuration":
        """
        Builds a configuration from the TSS_* environment variables.
        """
        return cls(
            credentials=UserCredential(
                username=os.environ.get(config.ENV_USERNAME, ""),
                password=os.environ.get(config.ENV_PASSWORD, ""),
            ),
            server_url=os.environ.get(config.ENV_SERVER_URL) or None,
            tenant=os.environ.get(config.ENV_TENANT) or None,
            tld=os.environ.get(config.ENV_TLD) or None,
        )


def get_base_url(configuration: Configuration) -> str:
    """
    Returns the base url of the server, without a trailing slash.

    :param Configuration configuration: the client configuration
    :return: the server url, or the cloud url derived from the tenant and tld
    :raises ServerConfigurationError: if neither server_url nor tenant is set
    """
    if configuration.server_url:
        return configuration.server_url.rstrip("/")
    if configuration.tenant:
        return config.CLOUD_URL_TEMPLATE.format(
            tenant=configuration.tenant, tld=configuration.tld or config.DEFAULT_TLD
        )
    raise ServerConfigurationError(
        "You must specify either a tenant or a server url, or set"
        f" {config.ENV_TENANT} or {config.ENV_SERVER_URL} in the environment."
    )
