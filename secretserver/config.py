"""
Overall configurations and constants for the secretserver python library.
"""

import os
from pathlib import Path

# Cache directory for local storage such as the internal logs. To change it, set
# the environment variable `TSS_CACHE_DIR` BEFORE IMPORTING secretserver.
#
# The cache directory is only created when something needs to be written into it,
# for example when the internal log is enabled.
CACHE_DIR = Path(os.environ.get("TSS_CACHE_DIR", Path.home() / ".cache" / "tss"))
LOGS_DIR = CACHE_DIR / "logs"

################################################################################
# Configurations you can change to customize the client's behavior.
################################################################################

# Timeout, in seconds, of every HTTP call made by the client. Set the environment
# variable `TSS_TIMEOUT` to change it.
_DEFAULT_TIMEOUT_IF_NOT_SPECIFIED = 120
try:
    DEFAULT_TIMEOUT = int(
        os.environ.get("TSS_TIMEOUT", str(_DEFAULT_TIMEOUT_IF_NOT_SPECIFIED))
    )
except ValueError:
    DEFAULT_TIMEOUT = _DEFAULT_TIMEOUT_IF_NOT_SPECIFIED
    print(
        f"You have set an invalid value for TSS_TIMEOUT {os.environ.get('TSS_TIMEOUT')}."
        f" Using default value of {DEFAULT_TIMEOUT} seconds."
    )

# Environment variables that the client reads when no explicit configuration is
# given.
ENV_USERNAME = "TSS_USERNAME"
ENV_PASSWORD = "TSS_PASSWORD"
ENV_TENANT = "TSS_TENANT"
ENV_TLD = "TSS_TLD"
ENV_SERVER_URL = "TSS_SERVER_URL"

################################################################################
# Server internals. Do not change these as they will change the behavior of the
# library and APIs.
################################################################################

# Cloud tenants are reachable under this url. The top level domain differs by
# region, e.g. "com", "eu", "com.au".
CLOUD_URL_TEMPLATE = "https://{tenant}.secretservercloud.{tld}"
DEFAULT_TLD = "com"

# REST api path and the OAuth2 token endpoint, both relative to the server url.
API_PATH_URI = "/api/v1"
TOKEN_PATH_URI = "/oauth2/token"


def _to_bool(s: str) -> bool:
    """
    Convert a string to a boolean value.
    """
    if not isinstance(s, str):
        raise TypeError(f"Expected a string, got {type(s)}")
    true_values = ("yes", "true", "t", "1", "y", "on")
    false_values = ("no", "false", "f", "0", "n", "off", "")
    s = s.lower()
    if s in true_values:
        return True
    elif s in false_values:
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: {s}. Valid true values: {true_values}. Valid false"
            f" values: {false_values}."
        )
