# apps/portfolios/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('portfolio', views.portfolio_collection, name='portfolio-list'),
    path('portfolio/pending', views.pending_portfolios, name='portfolio-pending'),
    path('portfolio/approve', views.approve_portfolio, name='portfolio-approve'),
    path('portfolio/<int:portfolio_id>', views.portfolio_detail, name='portfolio-detail'),
]
