from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.files.storage import default_storage

from apps.accounts.models import ProfileFile

PROFILE_URL = '/api/user/profile'
PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def _png(name='photo.png', size=None):
    content = PNG_BYTES if size is None else b'\x00' * size
    return SimpleUploadedFile(name, content, content_type='image/png')


def test_get_own_profile(auth_client, student):
    response = auth_client(student).get(PROFILE_URL)

    assert response.status_code == 200
    data = response.json()['data']
    assert data['email'] == student.email
    assert 'password' not in data


def test_update_profile_whitelist(auth_client, student):
    """Test profile updates ignore role, email and approval flags"""
    response = auth_client(student).put(PROFILE_URL, {
        'firstName': 'Somsri',
        'bio': 'I build things',
        'skills': ['Python', 'Figma'],
        'role': 'admin',
        'email': 'hijack@cmtc.ac.th',
        'teacherConfirmed': True,
        'isActive': False,
    }, format='json')

    assert response.status_code == 200
    student.refresh_from_db()
    assert student.first_name == 'Somsri'
    assert student.skills == ['Python', 'Figma']
    assert student.role == 'student'
    assert student.email == 'student@cmtc.ac.th'
    assert student.is_active is True


def test_bio_length_limit(auth_client, student):
    response = auth_client(student).put(PROFILE_URL, {'bio': 'x' * 1001}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'validation_error'


def test_upload_avatar_replaces_previous(auth_client, student):
    client = auth_client(student)

    first = client.post(f'{PROFILE_URL}/avatar', {'file': _png()}, format='multipart')
    assert first.status_code == 200
    first_url = first.json()['data']['avatarUrl']

    second = client.post(f'{PROFILE_URL}/avatar', {'file': _png('new.png')}, format='multipart')
    second_url = second.json()['data']['avatarUrl']

    student.refresh_from_db()
    assert student.avatar_url == second_url
    assert not default_storage.exists(first_url[len('/media/'):])
    assert default_storage.exists(second_url[len('/media/'):])


def test_avatar_type_checked(auth_client, student):
    upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')

    response = auth_client(student).post(f'{PROFILE_URL}/avatar', {'file': upload}, format='multipart')

    assert response.status_code == 400
    assert response.json()['error'] == 'invalid_file_type'


def test_avatar_size_checked(auth_client, student, settings):
    settings.AVATAR_MAX_BYTES = 100

    response = auth_client(student).post(f'{PROFILE_URL}/avatar', {'file': _png(size=101)}, format='multipart')

    assert response.status_code == 400
    assert response.json()['error'] == 'file_too_large'


def test_avatar_requires_file(auth_client, student):
    response = auth_client(student).post(f'{PROFILE_URL}/avatar', {}, format='multipart')

    assert response.status_code == 400
    assert response.json()['missingFields'] == ['file']


def test_upload_and_delete_profile_file(auth_client, student):
    client = auth_client(student)
    pdf = SimpleUploadedFile('cv.pdf', b'%PDF-1.4 test', content_type='application/pdf')

    response = client.post(f'{PROFILE_URL}/portfolio', {'file': pdf}, format='multipart')

    assert response.status_code == 201
    data = response.json()['data']
    assert data['type'] == 'pdf'
    assert data['name'] == 'cv.pdf'
    stored_name = data['url'][len('/media/'):]
    assert default_storage.exists(stored_name)

    response = client.delete(f"{PROFILE_URL}/portfolio/{data['fileId']}")

    assert response.status_code == 200
    assert not ProfileFile.objects.filter(file_id=data['fileId']).exists()
    assert not default_storage.exists(stored_name)


def test_pdf_size_limit(auth_client, student, settings):
    settings.PROFILE_PDF_MAX_BYTES = 10
    pdf = SimpleUploadedFile('cv.pdf', b'%PDF-1.4 too large', content_type='application/pdf')

    response = auth_client(student).post(f'{PROFILE_URL}/portfolio', {'file': pdf}, format='multipart')

    assert response.status_code == 400
    assert response.json()['error'] == 'file_too_large'


def test_cannot_delete_someone_elses_file(auth_client, student, other_student):
    profile_file = ProfileFile.objects.create(
        user=student, name='cv.pdf', kind='pdf', size=10, url='/media/x/cv.pdf'
    )

    response = auth_client(other_student).delete(f'{PROFILE_URL}/portfolio/{profile_file.file_id}')

    assert response.status_code == 404
    assert ProfileFile.objects.filter(pk=profile_file.pk).exists()


def test_public_profile_by_email(api_client, student):
    ProfileFile.objects.create(user=student, name='cv.pdf', kind='pdf', size=10, url='/media/x/cv.pdf')

    response = api_client.get(f'{PROFILE_URL}/by-email', {'email': student.email.upper()})

    assert response.status_code == 200
    data = response.json()['data']
    assert data['username'] == student.username
    assert len(data['portfolioFiles']) == 1
    assert 'isActive' not in data
    assert 'password' not in data


def test_public_profile_unknown_email(api_client, db):
    response = api_client.get(f'{PROFILE_URL}/by-email', {'email': 'ghost@cmtc.ac.th'})

    assert response.status_code == 404
