from apps.accounts.tokens import verify_token

LOGIN_URL = '/api/auth/login'


def test_login_success(api_client, student):
    """Test successful login returns the account and a token"""
    response = api_client.post(
        LOGIN_URL, {'email': f'  {student.email.upper()} ', 'password': 'testpass123'}, format='json'
    )

    assert response.status_code == 200
    data = response.json()['data']
    assert data['user']['email'] == student.email
    assert 'password' not in data['user']
    assert verify_token(data['token'])['role'] == 'student'


def test_login_missing_fields(api_client, db):
    response = api_client.post(LOGIN_URL, {'email': 'x@cmtc.ac.th'}, format='json')

    assert response.status_code == 400
    assert response.json()['missingFields'] == ['password']


def test_login_wrong_password(api_client, student):
    response = api_client.post(LOGIN_URL, {'email': student.email, 'password': 'wrong'}, format='json')

    assert response.status_code == 401
    assert response.json()['error'] == 'invalid_credentials'


def test_login_unknown_email(api_client, db):
    response = api_client.post(LOGIN_URL, {'email': 'ghost@cmtc.ac.th', 'password': 'whatever'}, format='json')

    assert response.status_code == 401
    assert response.json()['error'] == 'invalid_credentials'


def test_login_inactive_account(api_client, make_user):
    user = make_user('student', is_active=False)

    response = api_client.post(LOGIN_URL, {'email': user.email, 'password': 'testpass123'}, format='json')

    assert response.status_code == 401
    assert response.json()['error'] == 'invalid_credentials'


def test_unconfirmed_teacher_gets_403(api_client, make_user):
    """Test an unconfirmed teacher with the right password is an authorization failure"""
    teacher = make_user('teacher', teacher_confirmed=False)

    response = api_client.post(LOGIN_URL, {'email': teacher.email, 'password': 'testpass123'}, format='json')

    assert response.status_code == 403
    body = response.json()
    assert body['error'] == 'account_pending_approval'
    assert body['message'] == 'Wait for a teacher or administrator to approve your account.'


def test_unconfirmed_teacher_wrong_password_gets_401(api_client, make_user):
    teacher = make_user('teacher', teacher_confirmed=False)

    response = api_client.post(LOGIN_URL, {'email': teacher.email, 'password': 'nope'}, format='json')

    assert response.status_code == 401


def test_unapproved_company_gets_403(api_client, make_user):
    company = make_user('company', email='hr@acme.com', company_approved=False)

    response = api_client.post(LOGIN_URL, {'email': company.email, 'password': 'testpass123'}, format='json')

    assert response.status_code == 403
    assert response.json()['error'] == 'account_pending_approval'


def test_login_non_string_email(api_client, db):
    response = api_client.post(LOGIN_URL, {'email': 123, 'password': 'x'}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'invalid_email'
