"""
Admin Routes

Content management endpoints. Every route requires the admin session set by
POST /api/admin/login.
"""

import logging
import os
from urllib.parse import urlparse

from flask import current_app, jsonify, request
from werkzeug.utils import secure_filename

from unipet.admin import admin_bp
from unipet.auth.decorators import admin_required
from unipet.errors import NotFoundError, ValidationError
from unipet.extensions import db
from unipet.models import ContactSubmission, FaqItem, ImageAsset, NetworkUnit, Plan, SiteSettings
from unipet.schemas import (
    FaqItemCreate,
    FaqItemUpdate,
    NetworkUnitCreate,
    NetworkUnitUpdate,
    PlanCreate,
    PlanUpdate,
    SiteSettingsUpdate,
    create_values,
    update_values,
)
from unipet.services import decode_data_uri, fetch_remote_image, process_image
from unipet.utils import request_payload

logger = logging.getLogger(__name__)


def _get_or_404(model, item_id, message):
    item = db.session.get(model, item_id)
    if item is None:
        raise NotFoundError(message)
    return item


def _save(item):
    db.session.add(item)
    db.session.commit()
    return item


def _delete(item):
    db.session.delete(item)
    db.session.commit()


# ── Plans ────────────────────────────────────────────────────

@admin_bp.route('/plans', methods=['GET'])
@admin_required
def list_plans():
    """All plans, including inactive ones."""
    plans = Plan.query.order_by(Plan.display_order.asc(), Plan.created_at.asc()).all()
    return jsonify([p.to_dict() for p in plans])


@admin_bp.route('/plans', methods=['POST'])
@admin_required
def create_plan():
    values = create_values(PlanCreate, request_payload(), 'Dados do plano inválidos')
    plan = _save(Plan().apply(values))
    logger.info('Plan %s created (%s)', plan.id, plan.name)
    return jsonify(plan.to_dict()), 201


@admin_bp.route('/plans/<plan_id>', methods=['GET'])
@admin_required
def get_plan(plan_id):
    return jsonify(_get_or_404(Plan, plan_id, 'Plano não encontrado').to_dict())


@admin_bp.route('/plans/<plan_id>', methods=['PUT'])
@admin_required
def update_plan(plan_id):
    plan = _get_or_404(Plan, plan_id, 'Plano não encontrado')
    values = update_values(PlanUpdate, request_payload(), 'Dados do plano inválidos')
    _save(plan.apply(values))
    return jsonify(plan.to_dict())


@admin_bp.route('/plans/<plan_id>', methods=['DELETE'])
@admin_required
def delete_plan(plan_id):
    plan = _get_or_404(Plan, plan_id, 'Plano não encontrado')
    _delete(plan)
    logger.info('Plan %s deleted', plan_id)
    return jsonify({'success': True})


# ── Network units ────────────────────────────────────────────

@admin_bp.route('/network-units', methods=['GET'])
@admin_required
def list_network_units():
    units = NetworkUnit.query.order_by(NetworkUnit.created_at.desc()).all()
    return jsonify([u.to_dict() for u in units])


@admin_bp.route('/network-units', methods=['POST'])
@admin_required
def create_network_unit():
    values = create_values(NetworkUnitCreate, request_payload(), 'Dados da unidade inválidos')
    unit = _save(NetworkUnit().apply(values))
    logger.info('Network unit %s created (%s)', unit.id, unit.name)
    return jsonify(unit.to_dict()), 201


@admin_bp.route('/network-units/<unit_id>', methods=['GET'])
@admin_required
def get_network_unit(unit_id):
    return jsonify(_get_or_404(NetworkUnit, unit_id, 'Unidade não encontrada').to_dict())


@admin_bp.route('/network-units/<unit_id>', methods=['PUT'])
@admin_required
def update_network_unit(unit_id):
    unit = _get_or_404(NetworkUnit, unit_id, 'Unidade não encontrada')
    values = update_values(NetworkUnitUpdate, request_payload(), 'Dados da unidade inválidos')
    _save(unit.apply(values))
    return jsonify(unit.to_dict())


@admin_bp.route('/network-units/<unit_id>', methods=['DELETE'])
@admin_required
def delete_network_unit(unit_id):
    _delete(_get_or_404(NetworkUnit, unit_id, 'Unidade não encontrada'))
    logger.info('Network unit %s deleted', unit_id)
    return jsonify({'success': True})


# ── FAQ ──────────────────────────────────────────────────────

@admin_bp.route('/faq', methods=['GET'])
@admin_required
def list_faq():
    items = FaqItem.query.order_by(FaqItem.display_order.asc(), FaqItem.created_at.asc()).all()
    return jsonify([i.to_dict() for i in items])


@admin_bp.route('/faq', methods=['POST'])
@admin_required
def create_faq_item():
    values = create_values(FaqItemCreate, request_payload(), 'Dados da pergunta inválidos')
    item = _save(FaqItem().apply(values))
    return jsonify(item.to_dict()), 201


@admin_bp.route('/faq/<item_id>', methods=['GET'])
@admin_required
def get_faq_item(item_id):
    return jsonify(_get_or_404(FaqItem, item_id, 'Pergunta não encontrada').to_dict())


@admin_bp.route('/faq/<item_id>', methods=['PUT'])
@admin_required
def update_faq_item(item_id):
    item = _get_or_404(FaqItem, item_id, 'Pergunta não encontrada')
    values = update_values(FaqItemUpdate, request_payload(), 'Dados da pergunta inválidos')
    _save(item.apply(values))
    return jsonify(item.to_dict())


@admin_bp.route('/faq/<item_id>', methods=['DELETE'])
@admin_required
def delete_faq_item(item_id):
    _delete(_get_or_404(FaqItem, item_id, 'Pergunta não encontrada'))
    return jsonify({'success': True})


# ── Site settings ────────────────────────────────────────────

@admin_bp.route('/settings', methods=['GET'])
@admin_required
def get_settings():
    settings = SiteSettings.query.first()
    return jsonify(settings.to_dict() if settings else {})


@admin_bp.route('/settings', methods=['PUT'])
@admin_required
def update_settings():
    """Partial update; creates the settings row if it does not exist yet."""
    values = update_values(SiteSettingsUpdate, request_payload(), 'Dados de configuração inválidos')
    if not values:
        raise ValidationError('Nenhum dado fornecido para atualização')

    settings = SiteSettings.query.first()
    if settings is None:
        settings = SiteSettings()
        logger.info('Creating site settings row')
    _save(settings.apply(values))
    return jsonify(settings.to_dict())


# ── Contact submissions ──────────────────────────────────────

@admin_bp.route('/contact/submissions', methods=['GET'])
@admin_required
def list_contact_submissions():
    submissions = ContactSubmission.query.order_by(ContactSubmission.created_at.desc()).all()
    return jsonify([s.to_dict() for s in submissions])


@admin_bp.route('/contact/submissions/<submission_id>', methods=['DELETE'])
@admin_required
def delete_contact_submission(submission_id):
    _delete(_get_or_404(ContactSubmission, submission_id, 'Solicitação não encontrada'))
    return jsonify({'success': True})


# ── Images ───────────────────────────────────────────────────

def _uploaded_image():
    """Return (filename, raw bytes) from a file upload, URL or data URI."""
    upload = request.files.get('file')
    if upload is not None:
        return upload.filename or 'image', upload.read()

    data = request_payload()
    if data.get('url'):
        url = str(data['url'])
        timeout = current_app.config.get('REMOTE_IMAGE_TIMEOUT', 10)
        name = os.path.basename(urlparse(url).path) or 'image'
        return name, fetch_remote_image(url, timeout=timeout)
    if data.get('dataUri'):
        _, raw = decode_data_uri(str(data['dataUri']))
        return data.get('filename') or 'image', raw

    raise ValidationError('Nenhuma imagem enviada')


@admin_bp.route('/images', methods=['GET'])
@admin_required
def list_images():
    images = ImageAsset.query.order_by(ImageAsset.created_at.desc()).all()
    return jsonify([i.to_dict() for i in images])


@admin_bp.route('/images', methods=['POST'])
@admin_required
def upload_image():
    """Resize, re-encode and store an image; responds with its public URL."""
    filename, raw = _uploaded_image()
    config = current_app.config
    processed = process_image(
        raw,
        max_width=config.get('IMAGE_MAX_WIDTH', 800),
        max_height=config.get('IMAGE_MAX_HEIGHT', 600),
        quality=config.get('IMAGE_QUALITY', 80),
    )

    stem = os.path.splitext(secure_filename(filename))[0] or 'image'
    asset = _save(ImageAsset(
        filename=f'{stem}.{processed.extension}',
        mime_type=processed.mime_type,
        width=processed.width,
        height=processed.height,
        size=processed.size,
        data=processed.data,
    ))
    logger.info('Image %s stored (%dx%d, %d bytes)', asset.id, asset.width, asset.height, asset.size)
    return jsonify(asset.to_dict()), 201


@admin_bp.route('/images/<image_id>', methods=['DELETE'])
@admin_required
def delete_image(image_id):
    _delete(_get_or_404(ImageAsset, image_id, 'Imagem não encontrada'))
    return jsonify({'success': True})
