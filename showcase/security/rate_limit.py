import logging

from flask import current_app
from werkzeug.middleware.proxy_fix import ProxyFix

logger = logging.getLogger(__name__)


def init_proxy_fix(app):
    """
    Trust X-Forwarded-For/-Proto from the configured number of proxies.

    ``request.remote_addr`` (the rate-limit key) then resolves to the client
    as seen by the outermost trusted proxy, so a client cannot pick its own
    key by prepending addresses to the header.
    """
    hops = app.config.get("TRUSTED_PROXY_HOPS", 0)
    if hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)
        logger.info(f"Trusting {hops} proxy hop(s) for client address")


def intake_limit():
    """Limit string for the public intake endpoints, read per request."""
    return current_app.config.get("INTAKE_RATE_LIMIT", "5 per minute")
