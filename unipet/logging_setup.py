"""
Logging configuration and API request logging.
"""

import logging
import time

from flask import g, request

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

logger = logging.getLogger('unipet.requests')


def configure_logging(app):
    """Configure root logging once and hook request timing for /api routes."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if request.path.startswith('/api'):
            started = g.get('request_started')
            duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            logger.info('%s %s %s in %.0fms', request.method, request.path,
                        response.status_code, duration_ms)
        return response
