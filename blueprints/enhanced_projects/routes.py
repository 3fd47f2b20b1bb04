"""
Enhanced Project Routes - Projects with interactive card and effect settings
"""

from flask import jsonify, request, current_app
from flask_login import current_user
from sqlalchemy import func
from models import EnhancedProject
from extensions import db
from schemas import (
    EnhancedProjectRequest, EnhancedProjectChanges,
    CardSettingsPatch, EffectSettingsPatch, BulkUpdateRequest
)
from utils.decorators import login_required, admin_required, is_admin_request
from utils.errors import APIError, ForbiddenError, NotFoundError
from utils.helpers import (
    get_pagination_args, get_limit_arg, get_filter_arg, parse_bool_arg,
    parse_payload, apply_fields, deep_merge, search_filter
)
from . import enhanced_projects_bp


SORTABLE_FIELDS = {
    'createdAt': EnhancedProject.created_at,
    'updatedAt': EnhancedProject.updated_at,
    'name': EnhancedProject.name,
    'priority': EnhancedProject.priority,
    'status': EnhancedProject.status,
    'category': EnhancedProject.category,
}


def _get_project_or_404(project_id, message='Enhanced project not found'):
    project = EnhancedProject.query.filter_by(id=project_id).first()
    if not project:
        raise NotFoundError(message)
    return project


def _request_json():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@enhanced_projects_bp.route('/', methods=['GET'], strict_slashes=False)
def list_projects():
    """List enhanced projects with filters, search, sorting and pagination"""
    page, limit = get_pagination_args()
    query = EnhancedProject.query

    category = get_filter_arg('category')
    if category:
        query = query.filter(EnhancedProject.category == category)

    status = get_filter_arg('status')
    if status:
        query = query.filter(EnhancedProject.status == status)

    featured = parse_bool_arg('featured')
    if featured is not None:
        query = query.filter(EnhancedProject.is_featured.is_(featured))

    # Private projects are listed for admins only
    is_public = parse_bool_arg('public')
    if not is_admin_request():
        is_public = True
    if is_public is not None:
        query = query.filter(EnhancedProject.is_public.is_(is_public))

    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(search_filter(EnhancedProject, search))

    sort_by = request.args.get('sortBy', 'priority')
    sort_column = SORTABLE_FIELDS.get(sort_by, EnhancedProject.priority)
    descending = request.args.get('sortOrder', 'desc') != 'asc'
    query = query.order_by(sort_column.desc() if descending else sort_column.asc(),
                           EnhancedProject.created_at.desc())

    pagination = query.paginate(page=page, per_page=limit, error_out=False)

    return jsonify({
        'success': True,
        'data': [p.to_dict() for p in pagination.items],
        'pagination': {
            'currentPage': pagination.page,
            'totalPages': pagination.pages,
            'totalItems': pagination.total,
            'itemsPerPage': limit
        }
    })


@enhanced_projects_bp.route('/featured')
def featured_projects():
    """Featured public projects"""
    limit = get_limit_arg(6)
    projects = (EnhancedProject.query
                .filter(EnhancedProject.is_featured.is_(True), EnhancedProject.is_public.is_(True))
                .order_by(EnhancedProject.priority.desc(), EnhancedProject.created_at.desc())
                .limit(limit)
                .all())
    return jsonify({
        'success': True,
        'data': [p.to_dict() for p in projects],
        'count': len(projects)
    })


@enhanced_projects_bp.route('/category/<category>')
def projects_by_category(category):
    """Projects in one category; includePrivate=true is honored for admins"""
    limit = get_limit_arg(10)
    query = EnhancedProject.query.filter(EnhancedProject.category == category)
    if not (parse_bool_arg('includePrivate') and is_admin_request()):
        query = query.filter(EnhancedProject.is_public.is_(True))

    projects = (query
                .order_by(EnhancedProject.priority.desc(), EnhancedProject.created_at.desc())
                .limit(limit)
                .all())
    return jsonify({
        'success': True,
        'data': [p.to_dict() for p in projects],
        'category': category,
        'count': len(projects)
    })


@enhanced_projects_bp.route('/stats')
def project_stats():
    """Counts overall, by category and by status"""
    total = EnhancedProject.query.count()
    public = EnhancedProject.query.filter(EnhancedProject.is_public.is_(True)).count()
    featured = EnhancedProject.query.filter(EnhancedProject.is_featured.is_(True)).count()

    count = func.count(EnhancedProject.id)
    by_category = (db.session.query(EnhancedProject.category, count)
                   .group_by(EnhancedProject.category)
                   .order_by(count.desc(), EnhancedProject.category)
                   .all())
    by_status = (db.session.query(EnhancedProject.status, count)
                 .group_by(EnhancedProject.status)
                 .order_by(EnhancedProject.status)
                 .all())

    return jsonify({
        'success': True,
        'data': {
            'overview': {
                'total': total,
                'public': public,
                'featured': featured,
                'private': total - public
            },
            'byCategory': [{'category': c, 'count': n} for c, n in by_category],
            'byStatus': [{'status': s, 'count': n} for s, n in by_status]
        }
    })


@enhanced_projects_bp.route('/<project_id>')
def get_project(project_id):
    """Single enhanced project; private ones are visible to admins only"""
    project = _get_project_or_404(project_id)
    if not project.is_public and not is_admin_request():
        raise ForbiddenError('Access denied')
    return jsonify({'success': True, 'data': project.to_dict()})


@enhanced_projects_bp.route('/', methods=['POST'], strict_slashes=False)
@login_required
def create_project():
    """Create an enhanced project"""
    payload = parse_payload(EnhancedProjectRequest)
    project = EnhancedProject(**payload.to_model_values())
    db.session.add(project)
    db.session.commit()

    current_app.logger.info(f"Enhanced project created by {current_user.username}: {project.id}")
    return jsonify({
        'success': True,
        'data': project.to_dict(),
        'message': 'Enhanced project created successfully'
    }), 201


@enhanced_projects_bp.route('/<project_id>', methods=['PUT'])
@login_required
def update_project(project_id):
    """Update an enhanced project; settings objects are merged"""
    project = _get_project_or_404(project_id)
    payload = parse_payload(EnhancedProjectRequest)

    fields = payload.to_fields(exclude={'card_settings', 'effect_settings'})
    apply_fields(project, fields)
    if payload.card_settings is not None:
        project.card_settings = deep_merge(
            project.card_settings, payload.card_settings.to_document(exclude_unset=True))
    if payload.effect_settings is not None:
        project.effect_settings = deep_merge(
            project.effect_settings, payload.effect_settings.to_document(exclude_unset=True))
    db.session.commit()

    current_app.logger.info(f"Enhanced project updated by {current_user.username}: {project.id}")
    return jsonify({
        'success': True,
        'data': project.to_dict(),
        'message': 'Enhanced project updated successfully'
    })


@enhanced_projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    """Delete an enhanced project"""
    project = _get_project_or_404(project_id)
    db.session.delete(project)
    db.session.commit()

    current_app.logger.info(f"Enhanced project deleted: {project_id}")
    return jsonify({'success': True, 'message': 'Enhanced project deleted successfully'})


@enhanced_projects_bp.route('/<project_id>/card-settings', methods=['PATCH'])
@login_required
def update_card_settings(project_id):
    """Merge new card settings into a project"""
    if 'cardSettings' not in _request_json():
        raise APIError('Card settings are required', 400)
    project = _get_project_or_404(project_id)
    payload = parse_payload(CardSettingsPatch)

    project.card_settings = deep_merge(
        project.card_settings, payload.card_settings.to_document(exclude_unset=True))
    db.session.commit()

    return jsonify({
        'success': True,
        'data': {
            'id': project.id,
            'name': project.name,
            'cardSettings': project.card_settings
        },
        'message': 'Project card settings updated successfully'
    })


@enhanced_projects_bp.route('/<project_id>/effect-settings', methods=['PATCH'])
@login_required
def update_effect_settings(project_id):
    """Merge new effect settings into a project"""
    if 'effectSettings' not in _request_json():
        raise APIError('Effect settings are required', 400)
    project = _get_project_or_404(project_id)
    payload = parse_payload(EffectSettingsPatch)

    project.effect_settings = deep_merge(
        project.effect_settings, payload.effect_settings.to_document(exclude_unset=True))
    db.session.commit()

    return jsonify({
        'success': True,
        'data': {
            'id': project.id,
            'name': project.name,
            'effectSettings': project.effect_settings
        },
        'message': 'Project effect settings updated successfully'
    })


@enhanced_projects_bp.route('/bulk/update', methods=['PATCH'])
@admin_required
def bulk_update():
    """Apply the same field changes to several projects"""
    data = _request_json()
    if not isinstance(data.get('projectIds'), list) or not data.get('projectIds'):
        raise APIError('Project IDs array is required', 400)
    if not isinstance(data.get('updates'), dict) or not data.get('updates'):
        raise APIError('Updates object is required', 400)

    payload = parse_payload(BulkUpdateRequest, data)
    changes = payload.updates.to_fields()

    projects = EnhancedProject.query.filter(EnhancedProject.id.in_(payload.project_ids)).all()
    modified = 0
    for project in projects:
        if any(getattr(project, key) != value for key, value in changes.items()):
            apply_fields(project, changes)
            modified += 1
    db.session.commit()

    current_app.logger.info(f"Bulk update: matched={len(projects)} modified={modified}")
    return jsonify({
        'success': True,
        'data': {
            'matched': len(projects),
            'modified': modified
        },
        'message': f"Successfully updated {modified} projects"
    })


@enhanced_projects_bp.route('/<project_id>/clone', methods=['POST'])
@login_required
def clone_project(project_id):
    """Copy a project as a private, unfeatured draft"""
    original = _get_project_or_404(project_id, 'Original project not found')
    # null overrides fall back to the copied values
    body = {key: value for key, value in _request_json().items() if value is not None}
    overrides = parse_payload(EnhancedProjectChanges, body).to_fields()

    values = {
        column.name: getattr(original, column.name)
        for column in EnhancedProject.__table__.columns
        if column.name not in ('id', 'created_at', 'updated_at')
    }
    values.update({
        'name': f"{original.name} (Copy)"[:100],
        'is_public': False,
        'is_featured': False,
        'priority': 0,
    })
    values.update(overrides)
    values['card_settings'] = deep_merge(original.card_settings, {})
    values['effect_settings'] = deep_merge(original.effect_settings, {})

    clone = EnhancedProject(**values)
    db.session.add(clone)
    db.session.commit()

    current_app.logger.info(f"Enhanced project {original.id} cloned to {clone.id}")
    return jsonify({
        'success': True,
        'data': clone.to_dict(),
        'message': 'Project cloned successfully'
    }), 201
