# flake8: noqa
"""
This implements the types for the Secret Server REST api.
"""

# pre-import all modules so we can use them in type hints in editors easily.
from . import secret
