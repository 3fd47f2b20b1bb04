import pytest

from extensions import db
from models import EnhancedProject


BASE = '/api/enhanced-projects'


def _create(client, headers, payload, **overrides):
    response = client.post(BASE, headers=headers, json=dict(payload, **overrides))
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']


@pytest.fixture
def gallery(client, admin_headers, project_payload):
    return {
        'renderer': _create(client, admin_headers, project_payload, name='Renderer',
                            category='desktop', priority=9, isFeatured=True),
        'scheduler': _create(client, admin_headers, project_payload, name='Scheduler',
                             category='desktop', priority=8, status='in-progress'),
        'hotel': _create(client, admin_headers, project_payload, name='Hotel', priority=6,
                         isFeatured=True),
        'draft': _create(client, admin_headers, project_payload, name='Draft', category='desktop',
                         priority=10, isPublic=False, isFeatured=True),
    }


def test_create_fills_default_settings(client, user_headers, project_payload):
    data = _create(client, user_headers, project_payload)

    assert data['isFeatured'] is False
    assert data['cardSettings']['spotlightCard']['enableSpotlight'] is True
    assert data['cardSettings']['display']['accentColor'] == '#8B5CF6'
    assert data['cardSettings']['profileCard']['enableTilt'] is True
    assert data['effectSettings']['dither']['waveColor'] == [0.54, 0.36, 0.96]


def test_create_merges_partial_settings_with_defaults(client, user_headers, project_payload):
    data = _create(client, user_headers, project_payload, cardSettings={
        'display': {'accentColor': '#06B6D4', 'tags': ['C++']},
    })

    assert data['cardSettings']['display']['accentColor'] == '#06B6D4'
    assert data['cardSettings']['display']['tags'] == ['C++']
    assert data['cardSettings']['display']['textColor'] == '#F8FAFC'


def test_create_requires_token(client, project_payload):
    assert client.post(BASE, json=project_payload).status_code == 401


def test_create_rejects_bad_settings(client, user_headers, project_payload):
    response = client.post(BASE, headers=user_headers, json=dict(project_payload, effectSettings={
        'dither': {'waveColor': [0.5, 2.0, 0.1]},
    }))
    assert response.status_code == 400


def test_list_shows_public_projects_by_priority(client, gallery):
    body = client.get(BASE).get_json()

    assert [p['name'] for p in body['data']] == ['Renderer', 'Scheduler', 'Hotel']
    assert body['pagination'] == {
        'currentPage': 1,
        'totalPages': 1,
        'totalItems': 3,
        'itemsPerPage': 10,
    }


def test_list_private_filter_is_admin_only(client, admin_headers, gallery):
    anonymous = client.get(f"{BASE}?public=false").get_json()['data']
    assert 'Draft' not in [p['name'] for p in anonymous]

    admin = client.get(f"{BASE}?public=false", headers=admin_headers).get_json()['data']
    assert [p['name'] for p in admin] == ['Draft']

    everything = client.get(BASE, headers=admin_headers).get_json()['data']
    assert len(everything) == 4


def test_list_filters(client, gallery):
    featured = client.get(f"{BASE}?featured=true").get_json()['data']
    assert [p['name'] for p in featured] == ['Renderer', 'Hotel']

    desktop = client.get(f"{BASE}?category=desktop&status=in-progress").get_json()['data']
    assert [p['name'] for p in desktop] == ['Scheduler']


def test_featured_respects_limit(client, gallery):
    body = client.get(f"{BASE}/featured?limit=1").get_json()
    assert [p['name'] for p in body['data']] == ['Renderer']
    assert body['count'] == 1


def test_category_listing(client, admin_headers, gallery):
    public = client.get(f"{BASE}/category/desktop").get_json()
    assert [p['name'] for p in public['data']] == ['Renderer', 'Scheduler']
    assert public['category'] == 'desktop'

    ignored = client.get(f"{BASE}/category/desktop?includePrivate=true").get_json()
    assert ignored['count'] == 2

    with_private = client.get(f"{BASE}/category/desktop?includePrivate=true",
                              headers=admin_headers).get_json()
    assert [p['name'] for p in with_private['data']] == ['Draft', 'Renderer', 'Scheduler']


def test_stats(client, gallery):
    data = client.get(f"{BASE}/stats").get_json()['data']

    assert data['overview'] == {'total': 4, 'public': 3, 'featured': 3, 'private': 1}
    assert data['byCategory'] == [
        {'category': 'desktop', 'count': 3},
        {'category': 'web', 'count': 1},
    ]
    assert {'status': 'in-progress', 'count': 1} in data['byStatus']


def test_get_private_requires_admin(client, admin_headers, gallery):
    url = f"{BASE}/{gallery['draft']['id']}"
    assert client.get(url).status_code == 403
    assert client.get(url, headers=admin_headers).status_code == 200


def test_get_missing(client):
    response = client.get(f"{BASE}/missing")
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Enhanced project not found'


def test_update_merges_settings(client, user_headers, project_payload, gallery):
    url = f"{BASE}/{gallery['hotel']['id']}"
    response = client.put(url, headers=user_headers, json=dict(
        project_payload, name='Hotel Suite', cardSettings={'spotlightCard': {'borderRadius': '1rem'}}))

    data = response.get_json()['data']
    assert response.status_code == 200
    assert data['name'] == 'Hotel Suite'
    assert data['cardSettings']['spotlightCard']['borderRadius'] == '1rem'
    assert data['cardSettings']['spotlightCard']['enableSpotlight'] is True


def test_patch_card_settings(client, user_headers, gallery):
    url = f"{BASE}/{gallery['renderer']['id']}/card-settings"
    response = client.patch(url, headers=user_headers, json={
        'cardSettings': {'display': {'accentColor': '#FF0000', 'displayOrder': 2}},
    })

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['id'] == gallery['renderer']['id']
    assert data['name'] == 'Renderer'
    assert data['cardSettings']['display']['accentColor'] == '#FF0000'
    assert data['cardSettings']['display']['displayOrder'] == 2
    assert data['cardSettings']['display']['textColor'] == '#F8FAFC'
    assert data['cardSettings']['spotlightCard'] == gallery['renderer']['cardSettings']['spotlightCard']


def test_patch_card_settings_validation(client, user_headers, gallery):
    url = f"{BASE}/{gallery['renderer']['id']}/card-settings"

    missing = client.patch(url, headers=user_headers, json={'display': {}})
    assert missing.status_code == 400
    assert missing.get_json()['message'] == 'Card settings are required'

    bad_color = client.patch(url, headers=user_headers, json={
        'cardSettings': {'display': {'accentColor': 'purple'}},
    })
    assert bad_color.status_code == 400


def test_patch_effect_settings(client, user_headers, gallery):
    url = f"{BASE}/{gallery['renderer']['id']}/effect-settings"
    response = client.patch(url, headers=user_headers, json={
        'effectSettings': {'dither': {'colorNum': 12}},
    })

    dither = response.get_json()['data']['effectSettings']['dither']
    assert response.status_code == 200
    assert dither['colorNum'] == 12
    assert dither['waveFrequency'] == 2.5

    out_of_range = client.patch(url, headers=user_headers, json={
        'effectSettings': {'dither': {'colorNum': 64}},
    })
    assert out_of_range.status_code == 400

    missing = client.patch(url, headers=user_headers, json={})
    assert missing.get_json()['message'] == 'Effect settings are required'


def test_patch_settings_missing_project(client, user_headers):
    response = client.patch(f"{BASE}/missing/card-settings", headers=user_headers,
                            json={'cardSettings': {}})
    assert response.status_code == 404


def test_clone_project(client, user_headers, gallery):
    response = client.post(f"{BASE}/{gallery['renderer']['id']}/clone", headers=user_headers)

    assert response.status_code == 201
    clone = response.get_json()['data']
    assert clone['id'] != gallery['renderer']['id']
    assert clone['name'] == 'Renderer (Copy)'
    assert clone['isPublic'] is False
    assert clone['isFeatured'] is False
    assert clone['priority'] == 0
    assert clone['technologies'] == gallery['renderer']['technologies']
    assert clone['cardSettings'] == gallery['renderer']['cardSettings']


def test_clone_applies_overrides(client, user_headers, gallery):
    response = client.post(f"{BASE}/{gallery['hotel']['id']}/clone", headers=user_headers,
                           json={'name': 'Hotel Lite', 'category': 'mobile'})

    clone = response.get_json()['data']
    assert clone['name'] == 'Hotel Lite'
    assert clone['category'] == 'mobile'
    assert clone['isPublic'] is False


def test_clone_missing_project(client, user_headers):
    response = client.post(f"{BASE}/missing/clone", headers=user_headers)
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Original project not found'


def test_delete_requires_admin(client, admin_headers, user_headers, gallery):
    url = f"{BASE}/{gallery['hotel']['id']}"
    assert client.delete(url, headers=user_headers).status_code == 403
    assert client.delete(url, headers=admin_headers).status_code == 200
    assert client.get(url).status_code == 404


def test_bulk_update(app, client, admin_headers, gallery):
    ids = [gallery['renderer']['id'], gallery['hotel']['id'], 'missing']
    response = client.patch(f"{BASE}/bulk/update", headers=admin_headers, json={
        'projectIds': ids,
        'updates': {'priority': 9},
    })

    assert response.status_code == 200
    assert response.get_json()['data'] == {'matched': 2, 'modified': 1}

    with app.app_context():
        hotel = db.session.get(EnhancedProject, gallery['hotel']['id'])
        assert hotel.priority == 9


def test_bulk_update_validation(client, admin_headers, user_headers, gallery):
    url = f"{BASE}/bulk/update"
    body = {'projectIds': [gallery['hotel']['id']], 'updates': {'status': 'planned'}}

    assert client.patch(url, headers=user_headers, json=body).status_code == 403
    assert client.patch(url, headers=admin_headers, json={'updates': {'priority': 1}}).status_code == 400
    assert client.patch(url, headers=admin_headers,
                        json={'projectIds': [gallery['hotel']['id']], 'updates': {}}).status_code == 400
    assert client.patch(url, headers=admin_headers, json={
        'projectIds': [gallery['hotel']['id']], 'updates': {'status': 'abandoned'},
    }).status_code == 400


def test_clone_with_null_name_uses_copy_name(client, user_headers, gallery):
    response = client.post(f"{BASE}/{gallery['hotel']['id']}/clone", headers=user_headers,
                           json={'name': None, 'priority': None, 'category': 'mobile'})

    assert response.status_code == 201
    clone = response.get_json()['data']
    assert clone['name'] == 'Hotel (Copy)'
    assert clone['priority'] == 0
    assert clone['category'] == 'mobile'


@pytest.mark.parametrize('field', ['name', 'description', 'category', 'status', 'priority',
                                   'isPublic', 'isFeatured', 'technologies'])
def test_bulk_update_rejects_null_values(client, admin_headers, gallery, field):
    response = client.patch(f"{BASE}/bulk/update", headers=admin_headers, json={
        'projectIds': [gallery['hotel']['id']],
        'updates': {field: None},
    })

    assert response.status_code == 400
    body = response.get_json()
    assert body['message'] == 'Validation failed'
    assert body['errors'][0]['field'] == f"updates.{field}"
    assert body['errors'][0]['message'] == 'Value cannot be null'
