# apps/portfolios/comment_views.py
import logging

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework import status

from apps.accounts import policies
from apps.accounts.authentication import OptionalBearerTokenAuthentication
from apps.common.exceptions import NotFoundError, ValidationError, MissingFields, require_fields, parse_id
from .models import Portfolio, Comment
from .serializers import CommentSerializer

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 500


def _get_visible_portfolio(user, portfolio_id):
    portfolio = Portfolio.objects.filter(pk=parse_id(portfolio_id, 'portfolioId')).first()
    if portfolio is None or not policies.can_view_portfolio(user, portfolio):
        raise NotFoundError('Portfolio not found')
    return portfolio


@api_view(['GET', 'POST'])
@authentication_classes([OptionalBearerTokenAuthentication])
@permission_classes([IsAuthenticatedOrReadOnly])
def comment_collection(request):
    if request.method == 'POST':
        return _create_comment(request)

    portfolio_id = request.query_params.get('portfolioId')
    if not portfolio_id:
        raise MissingFields(['portfolioId'], 'Portfolio ID is required')

    portfolio = _get_visible_portfolio(request.user, portfolio_id)
    comments = portfolio.comments.select_related('author', 'portfolio')
    serializer = CommentSerializer(comments, many=True, context={'request': request})

    return Response({
        'success': True,
        'count': len(serializer.data),
        'data': serializer.data
    })


def _create_comment(request):
    require_fields(request.data, ('portfolioId', 'content'))

    content = str(request.data.get('content')).strip()
    if not content:
        raise ValidationError('Comment cannot be empty', code='empty_comment')
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f'Comment is too long (max {MAX_COMMENT_LENGTH} characters)', code='comment_too_long'
        )

    portfolio = _get_visible_portfolio(request.user, request.data.get('portfolioId'))

    author = request.user
    comment = Comment.objects.create(
        portfolio=portfolio,
        author=author,
        author_email=author.email,
        author_name=author.username or author.email.split('@')[0],
        author_role=author.role,
        content=content,
    )
    logger.info("Comment #%s posted on portfolio #%s by user #%s", comment.pk, portfolio.pk, author.pk)

    return Response({
        'success': True,
        'data': CommentSerializer(comment, context={'request': request}).data
    }, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_comment(request, comment_id):
    """Authors, portfolio owners and admins may remove a comment"""
    comment = Comment.objects.select_related('portfolio').filter(pk=comment_id).first()
    if comment is None:
        raise NotFoundError('Comment not found')

    policies.can_delete_comment(request.user, comment).enforce()

    comment.delete()
    logger.info("Comment #%s deleted by user #%s", comment_id, request.user.pk)

    return Response({
        'success': True,
        'message': 'Comment deleted successfully'
    })
