"""
Profile Routes - The portfolio owner's profile and derived views
"""

from collections import Counter

from flask import jsonify, current_app
from models import Profile
from extensions import db
from schemas import ProfileRequest
from utils.decorators import admin_required
from utils.errors import NotFoundError
from utils.helpers import parse_payload, apply_fields
from . import profile_bp


def _get_profile_or_404():
    profile = Profile.query.order_by(Profile.created_at).first()
    if not profile:
        raise NotFoundError('Profile not found')
    return profile


def _newest_first(entries):
    return sorted(entries or [], key=lambda entry: entry.get('startDate') or '', reverse=True)


@profile_bp.route('/', methods=['GET'], strict_slashes=False)
def get_profile():
    """Full profile"""
    return jsonify({'success': True, 'data': _get_profile_or_404().to_dict()})


@profile_bp.route('/', methods=['PUT'], strict_slashes=False)
@admin_required
def update_profile():
    """Replace the profile, creating it on first use"""
    values = parse_payload(ProfileRequest).to_model_values()

    profile = Profile.query.order_by(Profile.created_at).first()
    if profile:
        apply_fields(profile, values)
    else:
        profile = Profile(**values)
        db.session.add(profile)
    db.session.commit()

    current_app.logger.info(f"Profile updated: {profile.id}")
    return jsonify({
        'success': True,
        'message': 'Profile updated successfully',
        'data': profile.to_dict()
    })


@profile_bp.route('/skills')
def get_skills():
    """Skills grouped by category"""
    skills = _get_profile_or_404().skills or []
    skills_by_category = {}
    for skill in skills:
        skills_by_category.setdefault(skill.get('category'), []).append(skill)

    return jsonify({
        'success': True,
        'data': {
            'skillsByCategory': skills_by_category,
            'totalSkills': len(skills)
        }
    })


@profile_bp.route('/experience')
def get_experience():
    """Work experience, newest first"""
    return jsonify({'success': True, 'data': _newest_first(_get_profile_or_404().experience)})


@profile_bp.route('/education')
def get_education():
    """Education, newest first"""
    return jsonify({'success': True, 'data': _newest_first(_get_profile_or_404().education)})


@profile_bp.route('/stats')
def get_stats():
    """Stored counters plus figures derived from skills and experience"""
    profile = _get_profile_or_404()
    skills = profile.skills or []
    experience = profile.experience or []

    data = dict(profile.stats or {})
    data.update({
        'totalSkills': len(skills),
        'skillsByLevel': dict(Counter(skill.get('level') for skill in skills)),
        'totalExperience': len(experience),
        'currentJobs': sum(1 for entry in experience if entry.get('isCurrentJob'))
    })
    return jsonify({'success': True, 'data': data})


@profile_bp.route('/availability')
def get_availability():
    """Current availability for new work"""
    return jsonify({'success': True, 'data': _get_profile_or_404().availability or {}})
