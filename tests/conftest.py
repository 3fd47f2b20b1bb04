"""
Shared test fixtures for the portfolio API.

Provides: app on in-memory SQLite, test client, admin/regular users and their
bearer headers, sample request payloads.
"""

import pytest

from app import create_app
from extensions import db
from models import User
from utils.security import generate_token, hash_password, reset_rate_limits


ADMIN_PASSWORD = 'Admin123'
USER_PASSWORD = 'User1234'


@pytest.fixture
def app():
    """
    Application bound to a fresh in-memory database.

    No app context stays pushed during the test: each test client request gets
    its own context, so the logged-in user is never carried between requests.
    Wrap direct database access in `with app.app_context():`.
    """
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


def create_user(app, username, password, role='user'):
    """Persist a user and return it detached, with its columns loaded"""
    with app.app_context():
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            role=role
        )
        db.session.add(user)
        db.session.commit()
        db.session.refresh(user)
        db.session.expunge(user)
    return user


def bearer_headers(app, user):
    with app.app_context():
        return {'Authorization': f"Bearer {generate_token(user)}"}


@pytest.fixture
def admin_user(app):
    return create_user(app, 'admin', ADMIN_PASSWORD, role='admin')


@pytest.fixture
def regular_user(app):
    return create_user(app, 'visitor', USER_PASSWORD)


@pytest.fixture
def admin_headers(app, admin_user):
    return bearer_headers(app, admin_user)


@pytest.fixture
def user_headers(app, regular_user):
    return bearer_headers(app, regular_user)


@pytest.fixture
def project_payload():
    return {
        'name': 'Portfolio Website',
        'description': 'Responsive portfolio website with an admin panel.',
        'technologies': ['React', 'Flask', 'PostgreSQL'],
        'features': ['Project showcase', 'Contact form'],
        'githubUrl': 'https://github.com/example/portfolio',
        'demoUrl': 'https://portfolio.example.com',
        'category': 'web',
        'status': 'completed',
        'priority': 5,
        'startDate': '2023-10-01',
        'endDate': '2023-10-30',
    }


@pytest.fixture
def profile_payload():
    return {
        'fullName': 'Jane Doe',
        'title': 'Full-Stack Developer',
        'bio': 'Developer who enjoys building web applications end to end.',
        'shortBio': 'Full-stack developer.',
        'email': 'Jane@Example.com',
        'location': 'Remote',
        'skills': [
            {'name': 'React', 'category': 'frontend', 'level': 'advanced'},
            {'name': 'Flask', 'category': 'backend', 'level': 'advanced'},
            {'name': 'SQL', 'category': 'database', 'level': 'intermediate'},
        ],
        'experience': [
            {'title': 'Junior Developer', 'company': 'Startup', 'startDate': '2019-01-01',
             'endDate': '2020-12-31', 'description': 'Built internal tools.'},
            {'title': 'Developer', 'company': 'Agency', 'startDate': '2021-02-01',
             'description': 'Client web projects.', 'isCurrentJob': True},
        ],
        'education': [
            {'degree': 'BSc Computer Science', 'institution': 'University',
             'startDate': '2014-09-01', 'endDate': '2017-06-30'},
            {'degree': 'MSc Computer Science', 'institution': 'University',
             'startDate': '2017-09-01', 'endDate': '2019-06-30'},
        ],
        'availability': {'isAvailable': False, 'status': 'busy'},
        'stats': {'projectsCompleted': 12, 'yearsOfExperience': 5},
    }
