"""
Public Routes

Content served to the public site plus the quote request form.
"""

import logging
from datetime import datetime, timezone

from flask import current_app, jsonify, make_response, request
from sqlalchemy import text

from unipet.auth.credentials import ensure_credentials_loadable
from unipet.errors import ConfigurationError, NotFoundError
from unipet.extensions import db, limiter
from unipet.models import ContactSubmission, FaqItem, ImageAsset, NetworkUnit, Plan, SiteSettings
from unipet.public import public_bp
from unipet.schemas import ContactSubmissionCreate, create_values
from unipet.utils import request_payload

logger = logging.getLogger(__name__)

IMAGE_CACHE_SECONDS = 365 * 24 * 60 * 60


def _contact_rate_limit():
    return current_app.config.get('CONTACT_RATE_LIMIT', '10 per hour')


@public_bp.route('/api/plans')
def plans():
    """Active plans in display order."""
    items = Plan.query.filter_by(is_active=True) \
        .order_by(Plan.display_order.asc(), Plan.created_at.asc()).all()
    return jsonify([p.to_dict() for p in items])


@public_bp.route('/api/network-units')
def network_units():
    """Active network units, newest first."""
    units = NetworkUnit.query.filter_by(is_active=True) \
        .order_by(NetworkUnit.created_at.desc()).all()
    return jsonify([u.to_dict() for u in units])


@public_bp.route('/api/faq')
def faq():
    items = FaqItem.query.filter_by(is_active=True) \
        .order_by(FaqItem.display_order.asc(), FaqItem.created_at.asc()).all()
    return jsonify([i.to_dict() for i in items])


@public_bp.route('/api/site-settings')
def site_settings():
    settings = SiteSettings.query.first()
    return jsonify(settings.to_dict() if settings else {})


@public_bp.route('/api/contact', methods=['POST'])
@limiter.limit(_contact_rate_limit)
def contact():
    """Store a quote request from the contact form."""
    values = create_values(ContactSubmissionCreate, request_payload(), 'Dados do formulário inválidos')
    submission = ContactSubmission().apply(values)
    db.session.add(submission)
    db.session.commit()
    logger.info('Contact submission %s received (%s)', submission.id, submission.plan_interest)
    return jsonify({
        'success': True,
        'message': 'Solicitação enviada com sucesso! Entraremos em contato em breve.',
        'id': submission.id,
    }), 201


@public_bp.route('/api/images/<image_id>')
def image(image_id):
    """Serve stored image bytes with long-lived caching."""
    asset = db.session.get(ImageAsset, image_id)
    if asset is None:
        raise NotFoundError('Imagem não encontrada')

    response = make_response(asset.data)
    response.mimetype = asset.mime_type
    response.cache_control.public = True
    response.cache_control.max_age = IMAGE_CACHE_SECONDS
    response.set_etag(asset.id)
    return response.make_conditional(request)


@public_bp.route('/api/health')
def health():
    """Report database and credential status; 503 when either fails."""
    checks = {}

    try:
        db.session.execute(text('SELECT 1'))
        checks['database'] = 'ok'
    except Exception as exc:
        logger.error('Health check: database unavailable: %s', exc)
        db.session.rollback()
        checks['database'] = 'error'

    try:
        ensure_credentials_loadable(current_app)
        checks['credentials'] = 'ok'
    except ConfigurationError:
        logger.error('Health check: admin credentials missing')
        checks['credentials'] = 'error'

    healthy = all(status == 'ok' for status in checks.values())
    payload = {
        'status': 'healthy' if healthy else 'unhealthy',
        'checks': checks,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }
    return jsonify(payload), 200 if healthy else 503
