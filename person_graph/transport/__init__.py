"""
HTTP transport for the upstream REST API.
"""

from .http_client import HttpClient, HttpError

__all__ = [
    'HttpClient',
    'HttpError'
]
