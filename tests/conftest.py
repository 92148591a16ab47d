"""
UPORT - Test Configuration and Fixtures
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from apps.accounts.models import User, OneTimePasscode
from apps.accounts.tokens import issue_token
from apps.portfolios.models import Portfolio

PASSWORD = 'testpass123'
DOMAIN = 'cmtc.ac.th'


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded files out of the source tree"""
    settings.MEDIA_ROOT = str(tmp_path / 'media')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    """Create an account directly in the store"""
    counter = {'n': 0}

    def _make_user(role=User.ROLE_STUDENT, **fields):
        counter['n'] += 1
        n = counter['n']
        fields.setdefault('username', f'{role}{n}')
        fields.setdefault('email', f'{role}{n}@{DOMAIN}')
        if role == User.ROLE_TEACHER:
            fields.setdefault('teacher_confirmed', True)
        if role == User.ROLE_COMPANY:
            fields.setdefault('company_approved', True)
        password = fields.pop('password', PASSWORD)
        user = User(role=role, **fields)
        user.set_password(password)
        user.save()
        return user

    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user(User.ROLE_ADMIN, username='admin', email=f'admin@{DOMAIN}')


@pytest.fixture
def teacher(make_user):
    return make_user(User.ROLE_TEACHER, username='teacher', email=f'teacher@{DOMAIN}')


@pytest.fixture
def student(make_user):
    return make_user(User.ROLE_STUDENT, username='student', email=f'student@{DOMAIN}')


@pytest.fixture
def other_student(make_user):
    return make_user(User.ROLE_STUDENT, username='otherstudent', email=f'other@{DOMAIN}')


@pytest.fixture
def company(make_user):
    return make_user(User.ROLE_COMPANY, username='acme', email='hr@acme.com', company_name='Acme')


@pytest.fixture
def auth_client():
    """Return an APIClient authenticated as ``user`` with a freshly issued token"""
    def _auth_client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
        return client

    return _auth_client


@pytest.fixture
def verified_otp(db):
    """Record a fresh OTP verification for ``email`` as verify-otp would"""
    def _verified_otp(email):
        now = timezone.now()
        return OneTimePasscode.objects.create(
            email=email,
            code=OneTimePasscode.generate_code(),
            expires_at=now + timedelta(minutes=5),
            is_used=True,
            verified_at=now,
        )

    return _verified_otp


@pytest.fixture
def portfolio_data():
    return {
        'category': 'web',
        'title': 'Campus Map',
        'description': 'Interactive map of the campus',
        'fullDescription': 'A web app that shows every building on campus.',
        'technologies': ['React', 'Django'],
        'features': ['Search', 'Directions'],
        'duration': '3 months',
        'client': 'Student council',
    }


@pytest.fixture
def make_portfolio(db):
    def _make_portfolio(submitted_by, status=Portfolio.STATUS_PENDING, **fields):
        fields.setdefault('category', 'web')
        fields.setdefault('title', 'Portfolio')
        fields.setdefault('description', 'Short description')
        fields.setdefault('full_description', 'Long description')
        fields.setdefault('technologies', ['General'])
        fields.setdefault('features', ['Portfolio Item'])
        fields.setdefault('duration', '1 month')
        fields.setdefault('client', 'Self')
        return Portfolio.objects.create(submitted_by=submitted_by, status=status, **fields)

    return _make_portfolio
