import pytest

from apps.portfolios.models import Comment

COMMENTS_URL = '/api/comments'


@pytest.fixture
def published(student, make_portfolio):
    return make_portfolio(student, status='approved')


def test_post_comment(auth_client, company, published):
    response = auth_client(company).post(
        COMMENTS_URL, {'portfolioId': published.pk, 'content': '  Great work!  '}, format='json'
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert data['content'] == 'Great work!'
    assert data['authorName'] == company.username
    assert data['authorRole'] == 'company'
    assert data['canDelete'] is True


def test_post_requires_authentication(api_client, published):
    response = api_client.post(COMMENTS_URL, {'portfolioId': published.pk, 'content': 'hi'}, format='json')

    assert response.status_code == 401


def test_blank_comment_rejected(auth_client, other_student, published):
    response = auth_client(other_student).post(
        COMMENTS_URL, {'portfolioId': published.pk, 'content': '    '}, format='json'
    )

    assert response.status_code == 400


def test_long_comment_rejected(auth_client, other_student, published):
    response = auth_client(other_student).post(
        COMMENTS_URL, {'portfolioId': published.pk, 'content': 'x' * 501}, format='json'
    )

    assert response.status_code == 400
    assert response.json()['error'] == 'comment_too_long'


def test_comment_on_unknown_portfolio(auth_client, other_student, db):
    response = auth_client(other_student).post(
        COMMENTS_URL, {'portfolioId': 9999, 'content': 'hello'}, format='json'
    )

    assert response.status_code == 404


def test_list_requires_portfolio_id(api_client, db):
    response = api_client.get(COMMENTS_URL)

    assert response.status_code == 400
    assert response.json()['missingFields'] == ['portfolioId']


def test_list_newest_first_with_live_author_name(api_client, other_student, company, published):
    first = Comment.objects.create(
        portfolio=published, author=other_student, author_email=other_student.email,
        author_name='old-name', author_role='student', content='first',
    )
    second = Comment.objects.create(
        portfolio=published, author=company, author_email=company.email,
        author_name=company.username, author_role='company', content='second',
    )
    other_student.username = 'renamed'
    other_student.save()

    response = api_client.get(COMMENTS_URL, {'portfolioId': published.pk})

    assert response.status_code == 200
    rows = response.json()['data']
    assert [row['id'] for row in rows] == [second.pk, first.pk]
    assert rows[1]['authorName'] == 'renamed'
    assert all(row['canDelete'] is False for row in rows)


def test_author_name_survives_deleted_account(api_client, other_student, published):
    comment = Comment.objects.create(
        portfolio=published, author=other_student, author_email=other_student.email,
        author_name='snapshot', author_role='student', content='hi',
    )
    other_student.delete()

    rows = api_client.get(COMMENTS_URL, {'portfolioId': published.pk}).json()['data']

    assert rows[0]['id'] == comment.pk
    assert rows[0]['authorName'] == 'snapshot'


def test_comments_hidden_on_pending_portfolio(api_client, student, make_portfolio):
    pending = make_portfolio(student)

    response = api_client.get(COMMENTS_URL, {'portfolioId': pending.pk})

    assert response.status_code == 404


def test_can_delete_flags(auth_client, student, other_student, company, published):
    Comment.objects.create(
        portfolio=published, author=company, author_email=company.email,
        author_name=company.username, author_role='company', content='hello',
    )

    as_owner = auth_client(student).get(COMMENTS_URL, {'portfolioId': published.pk}).json()['data']
    as_stranger = auth_client(other_student).get(COMMENTS_URL, {'portfolioId': published.pk}).json()['data']

    assert as_owner[0]['canDelete'] is True
    assert as_stranger[0]['canDelete'] is False


def _comment(portfolio, author):
    return Comment.objects.create(
        portfolio=portfolio, author=author, author_email=author.email,
        author_name=author.username, author_role=author.role, content='hello',
    )


def test_author_deletes_own_comment(auth_client, company, published):
    comment = _comment(published, company)

    response = auth_client(company).delete(f'{COMMENTS_URL}/{comment.pk}')

    assert response.status_code == 200
    assert not Comment.objects.filter(pk=comment.pk).exists()


def test_portfolio_owner_deletes_comment(auth_client, student, company, published):
    comment = _comment(published, company)

    assert auth_client(student).delete(f'{COMMENTS_URL}/{comment.pk}').status_code == 200


def test_admin_deletes_comment(auth_client, admin_user, company, published):
    comment = _comment(published, company)

    assert auth_client(admin_user).delete(f'{COMMENTS_URL}/{comment.pk}').status_code == 200


def test_stranger_cannot_delete_comment(auth_client, other_student, company, published):
    comment = _comment(published, company)

    response = auth_client(other_student).delete(f'{COMMENTS_URL}/{comment.pk}')

    assert response.status_code == 403
    assert Comment.objects.filter(pk=comment.pk).exists()


def test_delete_unknown_comment(auth_client, admin_user):
    assert auth_client(admin_user).delete(f'{COMMENTS_URL}/9999').status_code == 404


def test_comment_at_length_limit_accepted(auth_client, other_student, published):
    response = auth_client(other_student).post(
        COMMENTS_URL, {'portfolioId': published.pk, 'content': 'x' * 500}, format='json'
    )

    assert response.status_code == 201
    assert len(response.json()['data']['content']) == 500
