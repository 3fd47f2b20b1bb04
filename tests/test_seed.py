import pytest

from extensions import db
from migrations.seed_database import seed_database
from models import Contact, EnhancedProject, Project, User


EXPECTED = {
    'admins': 1,
    'profiles': 1,
    'projects': 4,
    'enhanced_projects': 3,
    'ui_effects': 5,
}


@pytest.fixture
def seeded(app):
    app.config['DEFAULT_ADMIN_PASSWORD'] = 'Seeded123'
    with app.app_context():
        return seed_database()


def test_seed_creates_content(seeded):
    assert seeded == EXPECTED


def test_seed_is_idempotent(app, seeded):
    with app.app_context():
        again = seed_database()
    assert again == {name: 0 for name in EXPECTED}


def test_seeded_admin_can_log_in(client, seeded):
    response = client.post('/api/auth/login', json={'username': 'admin', 'password': 'Seeded123'})

    assert response.status_code == 200
    assert response.get_json()['data']['user']['role'] == 'admin'


def test_seed_generates_admin_password_when_unset(app, capsys):
    app.config['DEFAULT_ADMIN_PASSWORD'] = None
    with app.app_context():
        seed_database()
        assert User.query.filter_by(role='admin').count() == 1
    assert 'Generated admin password' in capsys.readouterr().out


def test_seeded_content_is_served(client, seeded):
    assert client.get('/api/profile').status_code == 200
    assert len(client.get('/api/projects/featured').get_json()['data']) > 0

    menu = client.get('/api/ui-effects/staggered-menu').get_json()
    assert 'message' not in menu
    assert [link['name'] for link in menu['data']['socialLinks']] == ['GitHub', 'LinkedIn', 'Twitter']


def test_reset_keeps_users_and_messages(app, seeded):
    with app.app_context():
        db.session.add(Contact(name='Sam', email='sam@example.com', subject='Hello there',
                               message='A message that should survive.'))
        Project.query.delete()
        db.session.commit()

        summary = seed_database(reset=True)

        assert summary == dict(EXPECTED, admins=0)
        assert Contact.query.count() == 1
        assert EnhancedProject.query.count() == 3


def test_seed_cli_command(app):
    app.config['DEFAULT_ADMIN_PASSWORD'] = 'Seeded123'
    result = app.test_cli_runner().invoke(args=['seed-db'])

    assert result.exit_code == 0
    assert 'projects: 4' in result.output
