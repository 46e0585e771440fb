"""
API Errors

Error taxonomy for the JSON API and the handlers that turn each error into
a structured response.
"""

import logging
import math
import time

from flask import jsonify
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from unipet.extensions import limiter

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto a JSON response."""

    status_code = 500
    message = 'Erro interno do servidor'

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.details = details

    def to_dict(self):
        payload = {'error': self.message}
        if self.details:
            payload['details'] = self.details
        return payload


class ValidationError(ApiError):
    status_code = 400
    message = 'Dados de entrada inválidos'


class AuthenticationError(ApiError):
    status_code = 401
    message = 'Admin authentication required'


class NotFoundError(ApiError):
    status_code = 404
    message = 'Recurso não encontrado'


class _RetryableError(ApiError):
    """Error carrying a retry-after hint in seconds."""

    def __init__(self, message=None, retry_after=0):
        super().__init__(message)
        self.retry_after = max(0, int(retry_after))

    def to_dict(self):
        payload = super().to_dict()
        payload['retryAfter'] = self.retry_after
        return payload


class LockoutError(_RetryableError):
    status_code = 423
    message = 'Conta temporariamente bloqueada devido a muitas tentativas de login. Tente novamente mais tarde.'


class RateLimitError(_RetryableError):
    status_code = 429
    message = 'Muitas requisições. Tente novamente mais tarde.'


class ConfigurationError(ApiError):
    status_code = 500
    message = 'Erro de configuração do servidor'


def _error_response(error):
    response = jsonify(error.to_dict())
    response.status_code = error.status_code
    if isinstance(error, _RetryableError):
        response.headers['Retry-After'] = str(error.retry_after)
    return response


def _rate_limit_retry_after(error):
    """Seconds until the breached window resets, never more than the window."""
    current = limiter.current_limit
    item = current.limit if current is not None else error.limit.limit
    window = item.get_expiry()
    if current is None:
        return window
    return min(max(math.ceil(current.reset_at - time.time()), 1), window)


def register_error_handlers(app):
    """Attach JSON error handlers to the application."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error('%s: %s', type(error).__name__, error.message)
        return _error_response(error)

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(error):
        logger.warning('Rate limit exceeded: %s', error.description)
        return _error_response(RateLimitError(retry_after=_rate_limit_retry_after(error)))

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Recurso não encontrado'}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({'error': 'Método não permitido'}), 405

    @app.errorhandler(413)
    def handle_too_large(error):
        return jsonify({'error': 'Arquivo muito grande'}), 413

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code
        logger.exception('Unhandled error: %s', error)
        return jsonify({'error': 'Erro interno do servidor'}), 500
