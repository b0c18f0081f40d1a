"""
Django settings module selector.

This module selects the appropriate settings based on the DJANGO_ENV environment variable.
Valid values are: development, production
Defaults to development if not set.
"""

from decouple import config

ENV = config("DJANGO_ENV", default="development").lower()

if ENV == "production":
    from .base import *  # pylint: disable=W0401,W0614
else:
    from .development import *  # pylint: disable=W0401,W0614
