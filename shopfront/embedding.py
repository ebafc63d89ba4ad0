"""
Deciding whether a shop page may be framed by another site.

Shops can be embedded in the websites of enterprises listed in
EMBEDDED_SHOPFRONTS_WHITELIST. The decision is based on the Referer
header; the page then advertises the allowed parent in its CSP.
"""

import logging
from urllib.parse import urlsplit

from django.conf import settings

logger = logging.getLogger(__name__)


def referer_host(request):
    referer = request.META.get("HTTP_REFERER", "")
    if not referer:
        return None
    try:
        return urlsplit(referer).hostname
    except ValueError:
        logger.info("Ignoring malformed referer %r", referer)
        return None


def whitelisted_domains():
    return settings.EMBEDDED_SHOPFRONTS_WHITELIST.split()


def strip_www(host):
    return host[4:] if host.startswith("www.") else host


def embedding_domain(request):
    """
    Return the host allowed to frame this request, or "" when none is.

    The referer host is echoed as sent, with any ``www.`` prefix intact.
    """
    host = referer_host(request)
    if not host:
        return ""
    if host == request.get_host().split(":")[0]:
        return host
    if not settings.ENABLE_EMBEDDED_SHOPFRONTS:
        return ""
    if strip_www(host) in whitelisted_domains():
        return host
    logger.debug("Referer %s is not whitelisted for embedding", host)
    return ""


def frame_ancestors(domain):
    return f"frame-ancestors 'self' {domain};"
