"""
UI Effect Routes - Front-end effect configuration

Public clients read the active effects and per-component settings; editing
requires a token.
"""

from flask import jsonify, current_app
from models import UIEffect
from extensions import db
from schemas import UIEffectRequest, ToggleRequest, EFFECT_SETTINGS_SCHEMAS
from utils.decorators import login_required
from utils.errors import APIError, ConflictError, NotFoundError
from utils.helpers import get_filter_arg, parse_bool_arg, parse_payload, deep_merge
from . import ui_effects_bp


def _get_effect_or_404(effect_id):
    effect = UIEffect.query.filter_by(id=effect_id).first()
    if not effect:
        raise NotFoundError('UI effect not found')
    return effect


def _ensure_unique_name(name, effect_id=None):
    query = UIEffect.query.filter(UIEffect.name == name)
    if effect_id:
        query = query.filter(UIEffect.id != effect_id)
    if query.first():
        raise ConflictError('Effect with this name already exists')


def _label(kind):
    return kind.replace('-', ' ')


def default_settings(kind):
    """Built-in settings for an effect kind, as served to the front end"""
    defaults = EFFECT_SETTINGS_SCHEMAS[kind]().to_document()
    if kind == 'staggered-menu':
        config = current_app.config
        defaults['socialLinks'] = [
            {'name': 'GitHub', 'url': config['SOCIAL_GITHUB_URL'], 'icon': 'github',
             'color': '#8B5CF6', 'order': 1},
            {'name': 'LinkedIn', 'url': config['SOCIAL_LINKEDIN_URL'], 'icon': 'linkedin',
             'color': '#06B6D4', 'order': 2},
        ]
    return defaults


def _effect_settings_response(kind):
    effect = (UIEffect.query
              .filter(UIEffect.type == kind, UIEffect.is_active.is_(True))
              .order_by(UIEffect.created_at)
              .first())
    if not effect:
        return jsonify({
            'success': True,
            'data': default_settings(kind),
            'message': f"Default {_label(kind)} settings returned"
        })
    return jsonify({'success': True, 'data': effect.settings})


@ui_effects_bp.route('/active')
def active_effects():
    """Active effects, grouped by type"""
    effects = (UIEffect.query
               .filter(UIEffect.is_active.is_(True))
               .order_by(UIEffect.type, UIEffect.name)
               .all())
    return jsonify({
        'success': True,
        'data': [e.to_dict() for e in effects],
        'count': len(effects)
    })


@ui_effects_bp.route('/dither')
def dither_settings():
    """Dither background settings"""
    return _effect_settings_response('dither')


@ui_effects_bp.route('/spotlight')
def spotlight_settings():
    """Spotlight card settings"""
    return _effect_settings_response('spotlight')


@ui_effects_bp.route('/profile-card')
def profile_card_settings():
    """Profile card settings"""
    return _effect_settings_response('profile-card')


@ui_effects_bp.route('/staggered-menu')
def staggered_menu_settings():
    """Staggered menu settings"""
    return _effect_settings_response('staggered-menu')


@ui_effects_bp.route('/', methods=['GET'], strict_slashes=False)
@login_required
def list_effects():
    """All effects, optionally filtered by type and active flag"""
    query = UIEffect.query

    effect_type = get_filter_arg('type')
    if effect_type:
        query = query.filter(UIEffect.type == effect_type)

    active = parse_bool_arg('active')
    if active is not None:
        query = query.filter(UIEffect.is_active.is_(active))

    effects = query.order_by(UIEffect.type, UIEffect.name).all()
    return jsonify({
        'success': True,
        'data': [e.to_dict() for e in effects],
        'count': len(effects)
    })


@ui_effects_bp.route('/<effect_id>')
@login_required
def get_effect(effect_id):
    """Single effect"""
    return jsonify({'success': True, 'data': _get_effect_or_404(effect_id).to_dict()})


@ui_effects_bp.route('/', methods=['POST'], strict_slashes=False)
@login_required
def create_effect():
    """Create an effect"""
    payload = parse_payload(UIEffectRequest)
    _ensure_unique_name(payload.name)

    effect = UIEffect(**payload.model_dump())
    db.session.add(effect)
    db.session.commit()

    current_app.logger.info(f"UI effect created: {effect.name} ({effect.type})")
    return jsonify({
        'success': True,
        'data': effect.to_dict(),
        'message': 'UI effect created successfully'
    }), 201


@ui_effects_bp.route('/<effect_id>', methods=['PUT'])
@login_required
def update_effect(effect_id):
    """Update an effect"""
    effect = _get_effect_or_404(effect_id)
    payload = parse_payload(UIEffectRequest)
    _ensure_unique_name(payload.name, effect.id)

    for key, value in payload.to_fields().items():
        setattr(effect, key, value)
    db.session.commit()

    current_app.logger.info(f"UI effect updated: {effect.id}")
    return jsonify({
        'success': True,
        'data': effect.to_dict(),
        'message': 'UI effect updated successfully'
    })


@ui_effects_bp.route('/<effect_id>', methods=['DELETE'])
@login_required
def delete_effect(effect_id):
    """Delete an effect"""
    effect = _get_effect_or_404(effect_id)
    db.session.delete(effect)
    db.session.commit()

    current_app.logger.info(f"UI effect deleted: {effect_id}")
    return jsonify({'success': True, 'message': 'UI effect deleted successfully'})


@ui_effects_bp.route('/<effect_id>/toggle', methods=['PATCH'])
@login_required
def toggle_effect(effect_id):
    """Set isActive from the body, or flip it when the body leaves it out"""
    effect = _get_effect_or_404(effect_id)
    payload = parse_payload(ToggleRequest)

    effect.is_active = (not effect.is_active) if payload.is_active is None else payload.is_active
    db.session.commit()

    state = 'activated' if effect.is_active else 'deactivated'
    return jsonify({
        'success': True,
        'data': effect.to_dict(),
        'message': f"Effect {state} successfully"
    })


@ui_effects_bp.route('/<kind>/settings', methods=['PUT'])
@login_required
def update_settings(kind):
    """Merge validated settings into the component settings of an effect kind"""
    schema = EFFECT_SETTINGS_SCHEMAS.get(kind)
    if schema is None:
        raise APIError(f"Unknown effect type: {kind}", 400)

    changes = parse_payload(schema).to_document(exclude_unset=True)

    effect = (UIEffect.query
              .filter(UIEffect.type == kind)
              .order_by(UIEffect.created_at)
              .first())
    if effect:
        effect.component_settings = deep_merge(effect.component_settings, changes)
    else:
        effect = UIEffect(
            name=f"Default {_label(kind).title()} Effect",
            type=kind,
            is_active=True,
            component_settings=deep_merge(default_settings(kind), changes)
        )
        db.session.add(effect)
    db.session.commit()

    current_app.logger.info(f"{kind} settings updated on effect {effect.id}")
    return jsonify({
        'success': True,
        'data': effect.component_settings,
        'message': f"{_label(kind).capitalize()} settings updated successfully"
    })
