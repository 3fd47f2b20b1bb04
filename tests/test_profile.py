import pytest


@pytest.fixture
def profile(client, admin_headers, profile_payload):
    response = client.put('/api/profile', headers=admin_headers, json=profile_payload)
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']


@pytest.mark.parametrize('path', ['', '/skills', '/experience', '/education', '/stats', '/availability'])
def test_missing_profile(client, path):
    response = client.get(f"/api/profile{path}")

    assert response.status_code == 404
    assert response.get_json()['message'] == 'Profile not found'


def test_update_creates_profile(client, profile):
    assert profile['fullName'] == 'Jane Doe'
    assert profile['email'] == 'jane@example.com'
    assert profile['skills'][0] == {
        'name': 'React',
        'category': 'frontend',
        'level': 'advanced',
        'yearsOfExperience': None,
    }
    assert profile['stats']['clientsSatisfied'] == 0
    assert profile['languages'] == []

    assert client.get('/api/profile').get_json()['data']['id'] == profile['id']


def test_update_replaces_existing_profile(client, admin_headers, profile_payload, profile):
    response = client.put('/api/profile', headers=admin_headers, json=dict(
        profile_payload, title='Staff Engineer', skills=[]))

    data = response.get_json()['data']
    assert response.get_json()['message'] == 'Profile updated successfully'
    assert data['id'] == profile['id']
    assert data['title'] == 'Staff Engineer'
    assert data['skills'] == []


def test_update_requires_admin(client, user_headers, profile_payload):
    assert client.put('/api/profile', json=profile_payload).status_code == 401
    assert client.put('/api/profile', headers=user_headers, json=profile_payload).status_code == 403


def test_update_validates_nested_entries(client, admin_headers, profile_payload):
    skills = [{'name': 'Go', 'category': 'backend', 'level': 'guru'}]
    response = client.put('/api/profile', headers=admin_headers,
                          json=dict(profile_payload, skills=skills))

    assert response.status_code == 400
    assert response.get_json()['errors'][0]['field'] == 'skills.0.level'


def test_skills_grouped_by_category(client, profile):
    data = client.get('/api/profile/skills').get_json()['data']

    assert data['totalSkills'] == 3
    assert set(data['skillsByCategory']) == {'frontend', 'backend', 'database'}
    assert [s['name'] for s in data['skillsByCategory']['backend']] == ['Flask']


def test_experience_newest_first(client, profile):
    data = client.get('/api/profile/experience').get_json()['data']
    assert [e['title'] for e in data] == ['Developer', 'Junior Developer']


def test_education_newest_first(client, profile):
    data = client.get('/api/profile/education').get_json()['data']
    assert [e['degree'] for e in data] == ['MSc Computer Science', 'BSc Computer Science']


def test_stats_include_derived_counts(client, profile):
    data = client.get('/api/profile/stats').get_json()['data']

    assert data['projectsCompleted'] == 12
    assert data['yearsOfExperience'] == 5
    assert data['totalSkills'] == 3
    assert data['skillsByLevel'] == {'advanced': 2, 'intermediate': 1}
    assert data['totalExperience'] == 2
    assert data['currentJobs'] == 1


def test_availability(client, profile):
    data = client.get('/api/profile/availability').get_json()['data']
    assert data == {'isAvailable': False, 'status': 'busy', 'message': None}
