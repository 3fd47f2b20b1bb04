"""
Project Routes - Public portfolio projects and admin management
"""

from flask import jsonify, request, current_app
from models import Project
from extensions import db
from schemas import ProjectRequest
from utils.decorators import admin_required, is_admin_request
from utils.errors import ForbiddenError, NotFoundError
from utils.helpers import (
    get_pagination_args, get_filter_arg, parse_payload,
    apply_fields, search_filter, build_pagination
)
from . import projects_bp


SORTABLE_FIELDS = {
    'createdAt': Project.created_at,
    'updatedAt': Project.updated_at,
    'name': Project.name,
    'priority': Project.priority,
    'status': Project.status,
    'category': Project.category,
}

FEATURED_MIN_PRIORITY = 7
FEATURED_LIMIT = 6


def _get_project_or_404(project_id):
    project = Project.query.filter_by(id=project_id).first()
    if not project:
        raise NotFoundError('Project not found')
    return project


@projects_bp.route('/', methods=['GET'], strict_slashes=False)
def list_projects():
    """List public projects with filtering, search, sorting and pagination"""
    page, limit = get_pagination_args()
    query = Project.query.filter(Project.is_public.is_(True))

    category = get_filter_arg('category')
    if category:
        query = query.filter(Project.category == category)

    status = get_filter_arg('status')
    if status:
        query = query.filter(Project.status == status)

    search = (request.args.get('search') or '').strip()
    if search:
        query = query.filter(search_filter(Project, search))

    sort_by = request.args.get('sortBy', 'createdAt')
    if sort_by not in SORTABLE_FIELDS:
        sort_by = 'createdAt'
    sort_column = SORTABLE_FIELDS[sort_by]
    descending = request.args.get('sortOrder', 'desc') != 'asc'
    order = [sort_column.desc() if descending else sort_column.asc()]
    if sort_by != 'priority':
        order.append(Project.priority.desc())

    pagination = query.order_by(*order).paginate(page=page, per_page=limit, error_out=False)

    return jsonify({
        'success': True,
        'data': {
            'projects': [p.to_dict() for p in pagination.items],
            'pagination': build_pagination(pagination, 'totalProjects')
        }
    })


@projects_bp.route('/featured')
def featured_projects():
    """High-priority public projects"""
    projects = (Project.query
                .filter(Project.is_public.is_(True), Project.priority >= FEATURED_MIN_PRIORITY)
                .order_by(Project.priority.desc(), Project.created_at.desc())
                .limit(FEATURED_LIMIT)
                .all())
    return jsonify({'success': True, 'data': [p.to_dict() for p in projects]})


@projects_bp.route('/<project_id>')
def get_project(project_id):
    """Single project; private ones are visible to admins only"""
    project = _get_project_or_404(project_id)
    if not project.is_public and not is_admin_request():
        raise ForbiddenError('Access denied')
    return jsonify({'success': True, 'data': project.to_dict()})


@projects_bp.route('/', methods=['POST'], strict_slashes=False)
@admin_required
def create_project():
    """Create a project"""
    payload = parse_payload(ProjectRequest)
    project = Project(**payload.model_dump())
    db.session.add(project)
    db.session.commit()

    current_app.logger.info(f"Project created: {project.id} ({project.name})")
    return jsonify({
        'success': True,
        'message': 'Project created successfully',
        'data': project.to_dict()
    }), 201


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    """Update a project"""
    project = _get_project_or_404(project_id)
    payload = parse_payload(ProjectRequest)
    apply_fields(project, payload.to_fields())
    db.session.commit()

    current_app.logger.info(f"Project updated: {project.id}")
    return jsonify({
        'success': True,
        'message': 'Project updated successfully',
        'data': project.to_dict()
    })


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    """Delete a project"""
    project = _get_project_or_404(project_id)
    db.session.delete(project)
    db.session.commit()

    current_app.logger.info(f"Project deleted: {project_id}")
    return jsonify({'success': True, 'message': 'Project deleted successfully'})
