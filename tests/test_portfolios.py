from apps.portfolios.models import Portfolio

PORTFOLIO_URL = '/api/portfolio'
PLACEHOLDER = 'https://placehold.co/800x600/FCD34D/1F2937?text=No+Image'


def test_create_portfolio(auth_client, student, portfolio_data):
    """Test new portfolios are pending and owned by the caller"""
    response = auth_client(student).post(
        PORTFOLIO_URL, {**portfolio_data, 'status': 'approved'}, format='json'
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert data['status'] == 'pending'
    assert data['submittedBy'] == student.email
    assert data['fullDescription'] == portfolio_data['fullDescription']

    portfolio = Portfolio.objects.get(pk=data['id'])
    assert portfolio.submitted_by == student
    assert portfolio.status == Portfolio.STATUS_PENDING


def test_create_requires_authentication(api_client, db, portfolio_data):
    response = api_client.post(PORTFOLIO_URL, portfolio_data, format='json')

    assert response.status_code == 401
    assert response.json()['error'] == 'no_token'


def test_create_missing_fields(auth_client, student):
    response = auth_client(student).post(
        PORTFOLIO_URL, {'category': 'web', 'title': 'Only a title', 'client': '   '}, format='json'
    )

    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'missing_fields'
    assert set(body['missingFields']) == {'description', 'fullDescription', 'duration', 'client'}


def test_empty_lists_get_defaults(auth_client, student, portfolio_data):
    response = auth_client(student).post(
        PORTFOLIO_URL, {**portfolio_data, 'technologies': [], 'features': ['  ']}, format='json'
    )

    data = response.json()['data']
    assert data['technologies'] == ['General']
    assert data['features'] == ['Portfolio Item']

    stored = Portfolio.objects.get(pk=data['id'])
    assert stored.technologies == ['General']
    assert stored.features == ['Portfolio Item']


def test_image_defaults_to_placeholder(auth_client, student, portfolio_data):
    response = auth_client(student).post(PORTFOLIO_URL, portfolio_data, format='json')

    assert response.json()['data']['image'] == PLACEHOLDER


def test_image_falls_back_to_uploaded_data_url(auth_client, student, portfolio_data):
    uploaded = 'data:image/png;base64,iVBORw0KGgo='

    response = auth_client(student).post(
        PORTFOLIO_URL, {**portfolio_data, 'image': '', 'uploadedFile': uploaded}, format='json'
    )

    assert response.json()['data']['image'] == uploaded


def test_invalid_category(auth_client, student, portfolio_data):
    response = auth_client(student).post(PORTFOLIO_URL, {**portfolio_data, 'category': 'poetry'}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'validation_error'


def test_ids_are_unique(auth_client, student, other_student, portfolio_data):
    """Test scenario C: two creations never share an id"""
    first = auth_client(student).post(PORTFOLIO_URL, portfolio_data, format='json')
    second = auth_client(other_student).post(PORTFOLIO_URL, portfolio_data, format='json')

    assert first.json()['data']['id'] != second.json()['data']['id']


def test_public_list_shows_approved_only(api_client, student, make_portfolio):
    approved = make_portfolio(student, status='approved')
    make_portfolio(student, status='pending')
    make_portfolio(student, status='rejected')

    response = api_client.get(PORTFOLIO_URL)

    assert response.status_code == 200
    assert [row['id'] for row in response.json()['data']] == [approved.pk]


def test_student_cannot_include_pending(auth_client, student, make_portfolio):
    make_portfolio(student, status='pending')

    response = auth_client(student).get(PORTFOLIO_URL, {'includePending': 'true'})

    assert response.json()['data'] == []


def test_reviewer_can_include_pending(auth_client, teacher, student, make_portfolio):
    make_portfolio(student, status='approved')
    make_portfolio(student, status='pending')

    response = auth_client(teacher).get(PORTFOLIO_URL, {'includePending': 'true'})

    assert response.json()['count'] == 2


def test_category_filter(api_client, student, make_portfolio):
    web = make_portfolio(student, status='approved', category='web')
    make_portfolio(student, status='approved', category='ai')

    response = api_client.get(PORTFOLIO_URL, {'category': 'web'})
    assert [row['id'] for row in response.json()['data']] == [web.pk]

    response = api_client.get(PORTFOLIO_URL, {'category': 'all'})
    assert response.json()['count'] == 2


def test_pending_detail_hidden_from_public(api_client, auth_client, student, other_student, teacher, make_portfolio):
    portfolio = make_portfolio(student)
    url = f'{PORTFOLIO_URL}/{portfolio.pk}'

    assert api_client.get(url).status_code == 404
    assert auth_client(other_student).get(url).status_code == 404
    assert auth_client(student).get(url).status_code == 200
    assert auth_client(teacher).get(url).status_code == 200


def test_scenario_update_permissions(auth_client, student, other_student, admin_user, make_portfolio):
    """Test scenario D: non-owner update is 403; owner and admin succeed"""
    portfolio = make_portfolio(student, status='approved')
    url = f'{PORTFOLIO_URL}/{portfolio.pk}'

    response = auth_client(other_student).put(url, {'title': 'Hijacked'}, format='json')
    assert response.status_code == 403

    response = auth_client(student).put(url, {'title': 'By owner'}, format='json')
    assert response.status_code == 200
    assert response.json()['data']['title'] == 'By owner'

    response = auth_client(admin_user).put(url, {'title': 'By admin'}, format='json')
    assert response.status_code == 200
    assert response.json()['data']['title'] == 'By admin'


def test_update_cannot_change_status(auth_client, student, make_portfolio):
    portfolio = make_portfolio(student)

    auth_client(student).put(
        f'{PORTFOLIO_URL}/{portfolio.pk}', {'status': 'approved', 'title': 'New'}, format='json'
    )

    portfolio.refresh_from_db()
    assert portfolio.status == Portfolio.STATUS_PENDING
    assert portfolio.title == 'New'


def test_teacher_cannot_edit_others_portfolio(auth_client, teacher, student, make_portfolio):
    portfolio = make_portfolio(student, status='approved')

    response = auth_client(teacher).put(f'{PORTFOLIO_URL}/{portfolio.pk}', {'title': 'x'}, format='json')

    assert response.status_code == 403


def test_delete_by_owner(auth_client, student, make_portfolio):
    portfolio = make_portfolio(student, status='approved')

    response = auth_client(student).delete(f'{PORTFOLIO_URL}/{portfolio.pk}')

    assert response.status_code == 200
    assert not Portfolio.objects.filter(pk=portfolio.pk).exists()


def test_delete_by_non_owner_forbidden(auth_client, student, other_student, make_portfolio):
    portfolio = make_portfolio(student, status='approved')

    response = auth_client(other_student).delete(f'{PORTFOLIO_URL}/{portfolio.pk}')

    assert response.status_code == 403
    assert Portfolio.objects.filter(pk=portfolio.pk).exists()


def test_unknown_portfolio(api_client, db):
    response = api_client.get(f'{PORTFOLIO_URL}/9999')

    assert response.status_code == 404
    assert response.json()['success'] is False
