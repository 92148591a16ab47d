# uport/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('django-admin/', admin.site.urls),

    # API endpoints
    path('api/auth/', include('apps.accounts.urls')),
    path('api/admin/', include('apps.accounts.admin_urls')),
    path('api/', include('apps.accounts.approval_urls')),
    path('api/user/', include('apps.accounts.profile_urls')),
    path('api/', include('apps.portfolios.urls')),
    path('api/', include('apps.portfolios.comment_urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL,
                          document_root=settings.MEDIA_ROOT)

admin.site.site_header = "UPORT Administration"
admin.site.site_title = "UPORT Admin"
admin.site.index_title = "Portfolio platform management"
