# flake8: noqa
"""
The api module implements the Secret Server REST api. `client.APIClient` is the
entry point; the secret operations live in `secret.SecretAPI`.
"""

from . import types
from . import client
