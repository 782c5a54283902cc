"""Client IP address utilities."""

from __future__ import annotations

from django.http import HttpRequest
from ipware import get_client_ip


def get_real_ip(request: HttpRequest) -> str | None:
    """
    Extract the client IP address of a request.

    Remote publishing clients usually reach the XML-RPC endpoint through a
    reverse proxy, so django-ipware reads X-Forwarded-For and related headers
    before falling back to REMOTE_ADDR.

    Returns None if the IP cannot be determined.
    """
    ip, _ = get_client_ip(request)
    return ip
