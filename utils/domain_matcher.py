"""
Domain matching utility
Tells whether the current request is being served from the configured mobile domain
"""

from typing import Optional
from urllib.parse import urlsplit


def parse_host(value: Optional[str]) -> Optional[str]:
    """
    Extract the host component from a URL or a bare host

    Args:
        value: e.g. 'http://m.example.com/', 'm.example.com' or 'm.example.com:8080'

    Returns:
        str: host without credentials or port, case preserved
        None: when no host can be extracted
    """
    if not value:
        return None

    try:
        parts = urlsplit(value)
        netloc = parts.netloc if parts.scheme else ''
        if not netloc and '://' in value:
            # Scheme with no host, e.g. 'http://'
            return None
        if not netloc:
            # Entered without a scheme, so the host ended up in the path
            netloc = urlsplit('//' + value.lstrip('/')).netloc
    except ValueError:
        return None

    host = netloc.rpartition('@')[2]
    if host.startswith('['):
        host = host.split(']')[0] + ']'
    else:
        host = host.partition(':')[0]

    return host or None


def on_mobile_domain(host: Optional[str], mobile_domain: Optional[str]) -> bool:
    """
    Return True if the request host is the configured mobile domain.
    Exact comparison only, no subdomain or wildcard matching.
    """
    mobile_host = parse_host(mobile_domain)
    if mobile_host is None:
        return False
    return parse_host(host) == mobile_host
