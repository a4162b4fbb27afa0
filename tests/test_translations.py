"""
Tests for translation endpoints (create, update by key, lookup, search).
"""

from translation_hub.models import Translation
from translation_hub.services import version_counter


WELCOME = {
    'key': 'welcome_message',
    'locale': 'en',
    'content': 'Welcome!',
    'context': 'web',
    'tags': ['web'],
}


class TestCreateTranslation:
    """Tests for POST /api/translations"""

    def test_create_success(self, client, auth_headers):
        response = client.post('/api/translations', json=WELCOME, headers=auth_headers)

        assert response.status_code == 201
        data = response.get_json()
        assert data['id']
        assert data['key'] == 'welcome_message'
        assert data['locale'] == 'en'
        assert data['context'] == 'web'
        assert data['tags'] == ['web']
        assert data['created_at'] and data['updated_at']

    def test_duplicate_triple_rejected(self, client, auth_headers):
        first = client.post('/api/translations', json=WELCOME, headers=auth_headers)
        second = client.post('/api/translations', json=WELCOME, headers=auth_headers)

        assert first.status_code == 201
        assert second.status_code == 422
        data = second.get_json()
        assert data['message'] == 'Validation failed'
        assert 'key' in data['errors']
        assert Translation.query.filter_by(key='welcome_message').count() == 1

    def test_same_key_other_locale_or_context_allowed(self, client, auth_headers):
        resp_fr = client.post('/api/translations', json={**WELCOME, 'locale': 'fr'}, headers=auth_headers)
        resp_mobile = client.post('/api/translations', json={**WELCOME, 'context': 'mobile'}, headers=auth_headers)
        resp_en = client.post('/api/translations', json=WELCOME, headers=auth_headers)

        assert resp_fr.status_code == 201
        assert resp_mobile.status_code == 201
        assert resp_en.status_code == 201

    def test_duplicate_without_context_rejected(self, client, auth_headers):
        payload = {'key': 'title', 'locale': 'en', 'content': 'Title'}

        assert client.post('/api/translations', json=payload, headers=auth_headers).status_code == 201
        assert client.post('/api/translations', json=payload, headers=auth_headers).status_code == 422

    def test_empty_context_distinct_from_missing(self, client, auth_headers):
        payload = {'key': 'title', 'locale': 'en', 'content': 'Title'}

        assert client.post('/api/translations', json=payload, headers=auth_headers).status_code == 201
        response = client.post('/api/translations', json={**payload, 'context': ''}, headers=auth_headers)
        assert response.status_code == 201
        assert response.get_json()['context'] == ''

    def test_missing_fields(self, client, auth_headers):
        response = client.post('/api/translations', json={'key': 'x'}, headers=auth_headers)

        assert response.status_code == 422
        errors = response.get_json()['errors']
        assert 'locale' in errors
        assert 'content' in errors

    def test_field_lengths(self, client, auth_headers):
        response = client.post('/api/translations', json={
            'key': 'k' * 256,
            'locale': 'en-GB-x',
            'content': 'c',
            'context': 'c' * 101,
        }, headers=auth_headers)

        assert response.status_code == 422
        errors = response.get_json()['errors']
        assert set(errors) == {'key', 'locale', 'context'}

    def test_tags_must_be_list_of_strings(self, client, auth_headers):
        bad_type = client.post('/api/translations', json={**WELCOME, 'tags': 'web'}, headers=auth_headers)
        bad_items = client.post('/api/translations', json={**WELCOME, 'tags': ['web', 3]}, headers=auth_headers)

        assert bad_type.status_code == 422
        assert bad_items.status_code == 422

    def test_duplicate_tags_collapsed(self, client, auth_headers):
        response = client.post('/api/translations', json={**WELCOME, 'tags': ['web', 'mobile', 'web']},
                               headers=auth_headers)

        assert response.get_json()['tags'] == ['web', 'mobile']

    def test_non_object_body(self, client, auth_headers):
        response = client.post('/api/translations', json=['not', 'an', 'object'], headers=auth_headers)

        assert response.status_code == 422
        assert 'body' in response.get_json()['errors']

    def test_create_advances_version(self, client, auth_headers, db_session):
        before = version_counter.current()
        client.post('/api/translations', json=WELCOME, headers=auth_headers)
        client.post('/api/translations', json=WELCOME, headers=auth_headers)  # duplicate

        assert version_counter.current() == before + 1

    def test_unauthenticated(self, client, db_session):
        response = client.post('/api/translations', json=WELCOME)

        assert response.status_code == 401

    def test_invalid_token(self, client, db_session):
        response = client.post('/api/translations', json=WELCOME,
                               headers={'Authorization': 'Bearer invalid.token.here'})

        assert response.status_code == 401


class TestUpdateTranslation:
    """Tests for PUT /api/translations/<key>"""

    def _create_greetings(self, client, headers):
        client.post('/api/translations', json={
            'key': 'greet', 'locale': 'en', 'content': 'Hello', 'context': 'web', 'tags': ['web'],
        }, headers=headers)
        client.post('/api/translations', json={
            'key': 'greet', 'locale': 'fr', 'content': 'Bonjour', 'context': 'mobile', 'tags': ['mobile'],
        }, headers=headers)

    def test_update_only_matching_locale(self, client, auth_headers):
        self._create_greetings(client, auth_headers)

        response = client.put('/api/translations/greet', json={'locale': 'en', 'content': 'Hi there'},
                              headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert data['locale'] == 'en'
        assert data['context'] == 'web'
        assert data['content'] == 'Hi there'

        en = client.get('/api/translations/greet?locale=en', headers=auth_headers).get_json()
        fr = client.get('/api/translations/greet?locale=fr', headers=auth_headers).get_json()
        assert en['content'] == 'Hi there'
        assert fr['content'] == 'Bonjour'

    def test_update_tags(self, client, auth_headers):
        self._create_greetings(client, auth_headers)

        response = client.put('/api/translations/greet', json={'locale': 'fr', 'tags': ['mobile', 'app']},
                              headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['tags'] == ['mobile', 'app']
        assert response.get_json()['content'] == 'Bonjour'

    def test_update_ambiguous_without_context(self, client, auth_headers):
        self._create_greetings(client, auth_headers)
        client.post('/api/translations', json={
            'key': 'greet', 'locale': 'en', 'content': 'Hey', 'context': 'mobile',
        }, headers=auth_headers)

        ambiguous = client.put('/api/translations/greet', json={'locale': 'en', 'content': 'X'},
                               headers=auth_headers)
        targeted = client.put('/api/translations/greet',
                              json={'locale': 'en', 'context': 'mobile', 'content': 'Yo'},
                              headers=auth_headers)

        assert ambiguous.status_code == 422
        assert 'context' in ambiguous.get_json()['errors']
        assert targeted.status_code == 200
        assert targeted.get_json()['content'] == 'Yo'
        web = client.get('/api/translations/greet?locale=en&context=web', headers=auth_headers).get_json()
        assert web['content'] == 'Hello'

    def test_update_explicit_null_context(self, client, auth_headers):
        client.post('/api/translations', json={'key': 'title', 'locale': 'en', 'content': 'A'},
                    headers=auth_headers)
        client.post('/api/translations', json={'key': 'title', 'locale': 'en', 'content': 'B', 'context': 'web'},
                    headers=auth_headers)

        response = client.put('/api/translations/title', json={'locale': 'en', 'context': None, 'content': 'C'},
                              headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['context'] is None
        assert response.get_json()['content'] == 'C'

    def test_update_not_found(self, client, auth_headers):
        response = client.put('/api/translations/missing', json={'locale': 'en', 'content': 'x'},
                              headers=auth_headers)

        assert response.status_code == 404
        assert response.get_json()['message'] == 'Translation not found'

    def test_update_requires_locale(self, client, auth_headers):
        self._create_greetings(client, auth_headers)

        response = client.put('/api/translations/greet', json={'content': 'x'}, headers=auth_headers)

        assert response.status_code == 422
        assert 'locale' in response.get_json()['errors']

    def test_update_advances_version_only_on_success(self, client, auth_headers, db_session):
        self._create_greetings(client, auth_headers)
        before = version_counter.current()

        client.put('/api/translations/greet', json={'locale': 'en', 'content': 'Hi'}, headers=auth_headers)
        client.put('/api/translations/missing', json={'locale': 'en', 'content': 'Hi'}, headers=auth_headers)

        assert version_counter.current() == before + 1


class TestShowTranslation:
    """Tests for GET /api/translations/<key>"""

    def test_lookup_by_key(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations/welcome_message', headers=auth_headers)

        assert response.status_code == 200
        assert response.get_json()['content'] == 'Welcome!'

    def test_lookup_is_exact_not_prefix(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations/welcome', headers=auth_headers)

        assert response.status_code == 404

    def test_lookup_with_locale_and_context(self, client, auth_headers, seeded_translations):
        fr = client.get('/api/translations/greet?locale=fr', headers=auth_headers)
        fr_web = client.get('/api/translations/greet?locale=fr&context=web', headers=auth_headers)

        assert fr.status_code == 200
        assert fr.get_json()['content'] == 'Bonjour'
        assert fr_web.status_code == 404

    def test_lookup_requires_auth(self, client, seeded_translations):
        response = client.get('/api/translations/greet')

        assert response.status_code == 401


class TestSearchTranslations:
    """Tests for GET /api/translations"""

    def test_search_all(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations', headers=auth_headers)

        assert response.status_code == 200
        data = response.get_json()
        assert len(data['translations']) == 5
        assert data['page'] == 1
        assert data['per_page'] == 50
        assert data['has_more'] is False

    def test_search_key_prefix(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations?key=wel', headers=auth_headers)

        keys = {t['key'] for t in response.get_json()['translations']}
        assert keys == {'welcome_message', 'welcome_back'}

    def test_search_tag(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations?tag=mobile', headers=auth_headers)

        results = response.get_json()['translations']
        assert len(results) == 2
        assert all('mobile' in t['tags'] for t in results)

    def test_search_combined(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations?key=gr&locale=en&context=web&tag=web', headers=auth_headers)

        results = response.get_json()['translations']
        assert [(t['key'], t['locale']) for t in results] == [('greet', 'en')]

    def test_search_empty_params_ignored(self, client, auth_headers, seeded_translations):
        response = client.get('/api/translations?key=&locale=&tag=', headers=auth_headers)

        assert len(response.get_json()['translations']) == 5

    def test_search_pagination(self, client, auth_headers, translation_factory):
        for i in range(51):
            translation_factory(key=f'item_{i:03d}', locale='en')

        first = client.get('/api/translations?key=item_', headers=auth_headers).get_json()
        second = client.get('/api/translations?key=item_&page=2', headers=auth_headers).get_json()

        assert len(first['translations']) == 50
        assert first['has_more'] is True
        assert [t['key'] for t in second['translations']] == ['item_050']
        assert second['has_more'] is False


class TestApiDocs:
    """Tests for the OpenAPI document served by flask-restx."""

    def test_swagger_lists_routes(self, client):
        response = client.get('/api/swagger.json')

        assert response.status_code == 200
        spec = response.get_json()
        assert spec['info']['title'] == 'Translation Hub API'
        assert '/translations' in spec['paths']
        assert set(spec['paths']['/translations/{key}']) >= {'get', 'put'}
        assert '/export/{locale}.json' in spec['paths']
        assert 'Bearer' in spec['securityDefinitions']

    def test_docs_ui(self, client):
        assert client.get('/api/docs').status_code == 200

    def test_missing_token_message(self, client, db_session):
        response = client.get('/api/translations')

        assert response.status_code == 401
        assert response.get_json() == {'message': 'Token is missing'}
