"""
URL configuration for the circle-split project.

All endpoints live under /api/ and require a bearer token issued by the
identity bridge, except the health check and the schema views.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # API endpoints
    path('api/auth/', include('apps.accounts.urls')),
    path('api/circles/', include('apps.circles.urls')),
    path('api/events/', include('apps.events.urls')),
    path('api/approvals/', include('apps.events.approval_urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
