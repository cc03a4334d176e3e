"""
SSRF Protection Module

Validates URLs before the web importer fetches recipe pages or images.
Blocks access to localhost, private IPs, and non-http(s) schemes.
"""

import ipaddress
import logging
import socket
from urllib.parse import urljoin, urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
}

LOCALHOST_ALIASES = {
    'localhost', 'localhost.localdomain',
    '127.0.0.1', '::1', '0.0.0.0',
}


class SSRFError(Exception):
    """Raised when a URL fails SSRF validation."""
    pass


def is_private_ip(ip_str):
    """Check if an IP address is private, loopback, or otherwise internal."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return True  # Invalid IP, treat as unsafe
    return (
        ip.is_private or
        ip.is_loopback or
        ip.is_reserved or
        ip.is_link_local or
        ip.is_multicast or
        ip.is_unspecified
    )


def is_safe_url(url):
    """
    Validate that a URL is safe to fetch.

    Returns (is_safe, error_message) tuple.
    """
    if not url:
        return False, "Empty URL"

    try:
        parsed = urlparse(url)
    except ValueError:
        return False, "Invalid URL format"

    if parsed.scheme not in ('http', 'https'):
        return False, f"Invalid scheme: {parsed.scheme}. Only http and https are allowed."

    hostname = parsed.hostname
    if not hostname:
        return False, "No hostname in URL"

    if hostname.lower() in LOCALHOST_ALIASES:
        return False, "Cannot access localhost"

    # Literal IP in the URL
    try:
        ipaddress.ip_address(hostname)
        if is_private_ip(hostname):
            return False, f"Cannot access private/internal IP: {hostname}"
    except ValueError:
        pass

    # Every address the hostname resolves to must be public
    try:
        resolved = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror:
        return False, f"Cannot resolve hostname: {hostname}"

    for _family, _type, _proto, _canonname, sockaddr in resolved:
        if is_private_ip(sockaddr[0]):
            return False, f"Hostname resolves to private/internal IP: {sockaddr[0]}"

    return True, None


def safe_fetch(url, headers=None, timeout=10, max_size=10 * 1024 * 1024):
    """
    Fetch a URL with SSRF protection and size limits.

    Args:
        url: The URL to fetch
        headers: Optional HTTP headers dict
        timeout: Request timeout in seconds (default 10)
        max_size: Maximum response size in bytes (default 10MB)

    Returns:
        requests.Response object with its content fully read

    Raises:
        SSRFError: If the URL fails security validation or the body is too large
        requests.RequestException: For network errors
    """
    is_safe, error = is_safe_url(url)
    if not is_safe:
        raise SSRFError(error)

    if headers is None:
        headers = DEFAULT_HEADERS

    # Don't follow redirects blindly; each hop is validated
    response = requests.get(url, headers=headers, timeout=timeout, stream=True, allow_redirects=False)
    redirects = 0
    while response.is_redirect and redirects < 5:
        location = urljoin(url, response.headers.get('location', ''))
        response.close()
        is_safe, error = is_safe_url(location)
        if not is_safe:
            raise SSRFError(f"Redirect blocked: {error}")
        url = location
        response = requests.get(url, headers=headers, timeout=timeout, stream=True, allow_redirects=False)
        redirects += 1

    response.raise_for_status()

    content_length = response.headers.get('content-length')
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        response.close()
        raise SSRFError(f"Response too large: {content_length} bytes (max {max_size})")

    content = b''
    for chunk in response.iter_content(chunk_size=8192):
        content += chunk
        if len(content) > max_size:
            response.close()
            raise SSRFError(f"Response exceeded maximum size of {max_size} bytes")

    # Replace content in response for non-streaming use
    response._content = content
    logger.debug("Fetched %s (%d bytes)", url, len(content))
    return response


def fetch_page(url, timeout=10, max_size=10 * 1024 * 1024):
    """Fetch a recipe page and return its HTML text."""
    return safe_fetch(url, timeout=timeout, max_size=max_size).text


def fetch_bytes(url, timeout=10, max_size=10 * 1024 * 1024):
    """Fetch a binary resource (e.g. a recipe image)."""
    return safe_fetch(url, timeout=timeout, max_size=max_size).content
