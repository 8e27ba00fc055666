"""
Development settings for the Auto Shop project.
"""

from .base import *

# =============================================================================
# DEBUG
# =============================================================================
DEBUG = True

# =============================================================================
# ALLOWED HOSTS
# =============================================================================
ALLOWED_HOSTS = ['*']

# =============================================================================
# REST FRAMEWORK - Development (browsable API)
# =============================================================================
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = [
    'rest_framework.renderers.JSONRenderer',
    'rest_framework.renderers.BrowsableAPIRenderer',
]

# =============================================================================
# LOGGING - Development
# =============================================================================
LOGGING['root']['level'] = 'DEBUG'
for _name in ('autoshop', 'application', 'infrastructure', 'presentation'):
    LOGGING['loggers'][_name]['level'] = 'DEBUG'
    LOGGING['loggers'][_name]['handlers'] = ['console']
