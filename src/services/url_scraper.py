"""URL scraping for the title and thumbnail enrichment jobs."""
import ipaddress
import socket
from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

USER_AGENT = 'Mozilla/5.0 (compatible; Bookmarks/1.0)'
DEFAULT_TIMEOUT = 5.0


class SSRFBlockedError(Exception):
    """Raised when a URL targets a private/internal network address."""

    pass


def is_private_ip(ip_str: str) -> bool:
    """
    Check if an IP address is private, loopback, or otherwise internal.

    Args:
        ip_str: IP address string (IPv4 or IPv6).

    Returns:
        True if the IP is private/internal, False if public.
    """
    try:
        ip = ipaddress.ip_address(ip_str)
        return (
            ip.is_private
            or ip.is_loopback
            or ip.is_link_local
            or ip.is_multicast
            or ip.is_reserved
            or ip.is_unspecified
        )
    except ValueError:
        # Unparseable addresses are blocked
        return True


def validate_url_not_private(url: str) -> None:
    """
    Validate that a URL does not target a private/internal network.

    Resolves the hostname and checks every address it maps to, so a public
    name pointing at an internal IP is rejected too.

    Raises:
        SSRFBlockedError: If the URL targets a private network.
        ValueError: If the URL is malformed or the host does not resolve.
    """
    parsed = urlparse(url)
    hostname = parsed.hostname

    if not hostname:
        raise ValueError(f"Invalid URL (no hostname): {url}")

    if hostname.lower() in ('localhost', 'localhost.localdomain'):
        raise SSRFBlockedError(f"Blocked request to localhost: {url}")

    try:
        addrinfo = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ValueError(f"Could not resolve hostname: {hostname}") from e

    for _, _, _, _, sockaddr in addrinfo:
        ip_str = sockaddr[0]
        if is_private_ip(ip_str):
            raise SSRFBlockedError(
                f"Blocked request to private/internal address: {url} resolves to {ip_str}",
            )


@dataclass
class FetchResult:
    """Result of fetching a URL (raw HTML before extraction)."""

    html: str | None
    final_url: str
    status_code: int | None
    error: str | None


async def fetch_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:  # noqa: ASYNC109
    """
    Fetch an HTML page.

    Best-effort fetch that returns error info on failure rather than raising.
    Follows redirects and re-checks the final URL against the private-network
    guard. Non-HTML responses are reported as errors.
    """
    try:
        validate_url_not_private(url)
    except (SSRFBlockedError, ValueError) as e:
        return FetchResult(html=None, final_url=url, status_code=None, error=str(e))

    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers={'User-Agent': USER_AGENT},
            http2=True,
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException:
        return FetchResult(html=None, final_url=url, status_code=None, error="Request timed out")
    except httpx.RequestError as e:
        return FetchResult(
            html=None, final_url=url, status_code=None, error=f"Request failed: {e}",
        )

    final_url = str(response.url)
    try:
        validate_url_not_private(final_url)
    except (SSRFBlockedError, ValueError) as e:
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"Redirect blocked: {e}",
        )

    if not response.is_success:
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )

    content_type = response.headers.get('content-type', '')
    if 'text/html' not in content_type.lower():
        return FetchResult(
            html=None,
            final_url=final_url,
            status_code=response.status_code,
            error=f"Unsupported content type: {content_type}",
        )
    return FetchResult(
        html=response.text,
        final_url=final_url,
        status_code=response.status_code,
        error=None,
    )


def _meta_content(soup: BeautifulSoup, attrs: dict) -> str | None:
    tag = soup.find('meta', attrs=attrs)
    if tag and tag.get('content'):
        return tag['content'].strip() or None
    return None


def extract_title(html: str) -> str | None:
    """
    Extract a page title.

    Pure function with no I/O. Priority:
    1. <title> tag
    2. <meta property="og:title">
    3. <meta name="twitter:title">
    4. The page's <h1>, only when there is exactly one
    """
    soup = BeautifulSoup(html, 'lxml')

    title_tag = soup.find('title')
    if title_tag and title_tag.string and title_tag.string.strip():
        return title_tag.string.strip()

    title = (
        _meta_content(soup, {'property': 'og:title'})
        or _meta_content(soup, {'name': 'twitter:title'})
    )
    if title:
        return title

    headings = soup.find_all('h1')
    if len(headings) == 1:
        text = headings[0].get_text(strip=True)
        return text or None
    return None


def extract_thumbnail(html: str, base_url: str) -> str | None:
    """
    Extract a preview image URL, resolved against `base_url`.

    Pure function with no I/O. Priority:
    1. <meta property="og:image">
    2. <meta name="twitter:image">
    3. <link rel="image_src">
    4. <meta property="article:image">
    """
    soup = BeautifulSoup(html, 'lxml')

    image = (
        _meta_content(soup, {'property': 'og:image'})
        or _meta_content(soup, {'name': 'twitter:image'})
    )
    if not image:
        link = soup.find('link', rel='image_src')
        if link and link.get('href'):
            image = link['href'].strip() or None
    if not image:
        image = _meta_content(soup, {'property': 'article:image'})

    if not image:
        return None
    return urljoin(base_url, image)


async def fetch_title(url: str, timeout: float = DEFAULT_TIMEOUT) -> str | None:  # noqa: ASYNC109
    """Fetch a page and return its title, or None when the page or title is unavailable."""
    result = await fetch_url(url, timeout)
    if result.error or result.html is None:
        return None
    return extract_title(result.html)


async def fetch_thumbnail(url: str, timeout: float = DEFAULT_TIMEOUT) -> str | None:  # noqa: ASYNC109
    """Fetch a page and return its preview image URL, or None when unavailable."""
    result = await fetch_url(url, timeout)
    if result.error or result.html is None:
        return None
    return extract_thumbnail(result.html, result.final_url)
