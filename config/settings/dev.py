"""Development settings for ShareIt project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and rendering
logs for humans. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

LOGGING['handlers']['console']['formatter'] = 'console'  # noqa: F405
