# flake8: noqa
"""
The secretserver python library.
"""

from ._version import __version__

# APIClient and the secret types are the main classes that we want to expose.
from .api.client import APIClient
from .api.secret import ByID, ByPath, DecodeError, InvalidReference
from .api.api_resource import TransportError, ClientError, NotFoundError, ServerError
from .api.types.secret import Secret, SecretField, SshKeyArgs
from .api.utils import Configuration, UserCredential
