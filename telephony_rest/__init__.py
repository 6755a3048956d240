"""
REST client package for a multi-tenant telephony API
Provides requests, error mapping and lazily paging collection reads shared by every resource
"""

import logging

from .config_loader import (
    ConfigLoader, ClientConfig, ConfigurationError, EnvironmentVariableError,
    DEFAULT_PAGE_SIZE, configure_logging
)
from .http_client import HTTPClient, Request, Response, HttpMethod, Domains
from .error_mapper import (
    TelephonyError, ApiConnectionError, ApiError, RecordDecodeError,
    ResourceSetBrokenError, RestException, classify, validate_response
)
from .descriptor import ResourceDescriptor
from .page import Page, PageMeta
from .reader import Reader
from .resource_set import ResourceSet
from .operations import fetch, create, update, delete

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'ConfigLoader',
    'ClientConfig',
    'ConfigurationError',
    'EnvironmentVariableError',
    'DEFAULT_PAGE_SIZE',
    'configure_logging',
    'HTTPClient',
    'Request',
    'Response',
    'HttpMethod',
    'Domains',
    'TelephonyError',
    'ApiConnectionError',
    'ApiError',
    'RecordDecodeError',
    'ResourceSetBrokenError',
    'RestException',
    'classify',
    'validate_response',
    'ResourceDescriptor',
    'Page',
    'PageMeta',
    'Reader',
    'ResourceSet',
    'fetch',
    'create',
    'update',
    'delete'
]
