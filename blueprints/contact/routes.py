"""
Contact Routes - Public contact form and admin inbox
"""

from flask import jsonify, request, current_app
from models import Contact
from extensions import db
from schemas import ContactRequest
from utils.decorators import admin_required
from utils.errors import NotFoundError
from utils.helpers import (
    get_pagination_args, get_filter_arg, parse_bool_arg, parse_payload, build_pagination
)
from utils.notifications import notify_new_contact
from utils.security import check_rate_limit, get_client_ip
from . import contact_bp


SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."


def _get_contact_or_404(contact_id):
    contact = Contact.query.filter_by(id=contact_id).first()
    if not contact:
        raise NotFoundError('Message not found')
    return contact


@contact_bp.route('/', methods=['POST'], strict_slashes=False)
def submit_contact():
    """Submit the public contact form"""
    check_rate_limit('contact')

    data = request.get_json(silent=True) or {}

    # Honeypot: bots fill the hidden website field
    if isinstance(data, dict) and data.get('website'):
        current_app.logger.warning(f"Honeypot triggered on contact form from {get_client_ip()}")
        return jsonify({'success': True, 'message': SUCCESS_MESSAGE}), 201

    payload = parse_payload(ContactRequest, data)
    contact = Contact(
        name=payload.name,
        email=payload.email,
        subject=payload.subject,
        message=payload.message,
        ip_address=get_client_ip(),
        user_agent=(request.headers.get('User-Agent') or '')[:255] or None
    )
    db.session.add(contact)
    db.session.commit()

    current_app.logger.info(f"Contact message {contact.id} received from {contact.email}")
    notify_new_contact(contact)

    return jsonify({
        'success': True,
        'message': SUCCESS_MESSAGE,
        'data': {
            'id': contact.id,
            'timestamp': contact.created_at.isoformat()
        }
    }), 201


@contact_bp.route('/', methods=['GET'], strict_slashes=False)
@admin_required
def list_messages():
    """Admin inbox, newest first"""
    page, limit = get_pagination_args(default_limit=20)
    query = Contact.query

    is_read = parse_bool_arg('isRead')
    if is_read is not None:
        query = query.filter(Contact.is_read.is_(is_read))

    priority = get_filter_arg('priority')
    if priority:
        query = query.filter(Contact.priority == priority)

    pagination = (query
                  .order_by(Contact.created_at.desc())
                  .paginate(page=page, per_page=limit, error_out=False))

    return jsonify({
        'success': True,
        'data': {
            'messages': [c.to_dict() for c in pagination.items],
            'pagination': build_pagination(pagination, 'totalMessages')
        }
    })


@contact_bp.route('/<contact_id>/read', methods=['PUT'])
@admin_required
def mark_read(contact_id):
    """Mark a message as read"""
    contact = _get_contact_or_404(contact_id)
    contact.is_read = True
    db.session.commit()
    return jsonify({
        'success': True,
        'message': 'Message marked as read',
        'data': contact.to_dict()
    })


@contact_bp.route('/<contact_id>/replied', methods=['PUT'])
@admin_required
def mark_replied(contact_id):
    """Mark a message as replied, which also marks it read"""
    contact = _get_contact_or_404(contact_id)
    contact.is_replied = True
    contact.is_read = True
    db.session.commit()
    return jsonify({
        'success': True,
        'message': 'Message marked as replied',
        'data': contact.to_dict()
    })


@contact_bp.route('/<contact_id>', methods=['DELETE'])
@admin_required
def delete_message(contact_id):
    """Delete a contact message"""
    contact = _get_contact_or_404(contact_id)
    db.session.delete(contact)
    db.session.commit()

    current_app.logger.info(f"Contact message deleted: {contact_id}")
    return jsonify({'success': True, 'message': 'Message deleted successfully'})
