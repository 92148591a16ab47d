# apps/portfolios/views.py
import logging

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework import status

from apps.accounts import policies
from apps.accounts.authentication import OptionalBearerTokenAuthentication
from apps.accounts.permissions import IsReviewer
from apps.common.exceptions import NotFoundError, require_fields, parse_id
from .models import Portfolio
from .serializers import PortfolioSerializer
from .workflows import portfolio_approval

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('category', 'title', 'description', 'fullDescription', 'duration', 'client')


def _portfolio_queryset():
    return Portfolio.objects.select_related('submitted_by', 'approved_by')


def _get_visible_portfolio(user, portfolio_id):
    portfolio = _portfolio_queryset().filter(pk=portfolio_id).first()
    if portfolio is None or not policies.can_view_portfolio(user, portfolio):
        raise NotFoundError('Portfolio not found')
    return portfolio


@api_view(['GET', 'POST'])
@authentication_classes([OptionalBearerTokenAuthentication])
@permission_classes([IsAuthenticatedOrReadOnly])
def portfolio_collection(request):
    if request.method == 'POST':
        return _create_portfolio(request)

    portfolios = _portfolio_queryset()

    include_pending = request.query_params.get('includePending', '').lower() == 'true'
    if not (include_pending and policies.can_review(request.user)):
        portfolios = portfolios.filter(status=Portfolio.STATUS_APPROVED)

    category = request.query_params.get('category')
    if category and category != 'all':
        portfolios = portfolios.filter(category=category)

    serializer = PortfolioSerializer(portfolios.order_by('id'), many=True)
    return Response({
        'success': True,
        'count': len(serializer.data),
        'data': serializer.data
    })


def _create_portfolio(request):
    """New entries always start pending and belong to the caller."""
    require_fields(request.data, REQUIRED_FIELDS)

    serializer = PortfolioSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    portfolio = serializer.save(status=Portfolio.STATUS_PENDING, submitted_by=request.user)

    logger.info("Portfolio #%s submitted by user #%s", portfolio.pk, request.user.pk)
    return Response({
        'success': True,
        'message': 'Portfolio submitted for approval',
        'data': PortfolioSerializer(portfolio).data
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@authentication_classes([OptionalBearerTokenAuthentication])
@permission_classes([IsAuthenticatedOrReadOnly])
def portfolio_detail(request, portfolio_id):
    portfolio = _get_visible_portfolio(request.user, portfolio_id)

    if request.method == 'GET':
        return Response({
            'success': True,
            'data': PortfolioSerializer(portfolio).data
        })

    policies.can_modify_portfolio(request.user, portfolio).enforce()

    if request.method == 'PUT':
        serializer = PortfolioSerializer(portfolio, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        portfolio = serializer.save()
        logger.info("Portfolio #%s updated by user #%s", portfolio.pk, request.user.pk)
        return Response({
            'success': True,
            'message': 'Portfolio updated successfully',
            'data': PortfolioSerializer(portfolio).data
        })

    portfolio.delete()
    logger.info("Portfolio #%s deleted by user #%s", portfolio_id, request.user.pk)
    return Response({
        'success': True,
        'message': 'Portfolio deleted successfully'
    })


@api_view(['GET'])
@permission_classes([IsReviewer])
def pending_portfolios(request):
    """Review queue for admins and teachers"""
    portfolios = portfolio_approval.pending().select_related('submitted_by').order_by('id')
    serializer = PortfolioSerializer(portfolios, many=True)
    return Response({
        'success': True,
        'count': len(serializer.data),
        'data': serializer.data
    })


@api_view(['POST'])
@permission_classes([IsReviewer])
def approve_portfolio(request):
    require_fields(request.data, ('portfolioId', 'action'))
    portfolio_id = parse_id(request.data.get('portfolioId'), 'portfolioId')

    outcome, portfolio = portfolio_approval.transition(
        portfolio_id, request.data.get('action'), request.user
    )

    return Response({
        'success': True,
        'message': f'Portfolio {outcome} successfully',
        'data': PortfolioSerializer(portfolio).data
    })
