from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'events'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.EventViewSet, basename='event')

urlpatterns = [
    # Event ViewSet routes
    # GET    /api/events/                          - List user's events
    # POST   /api/events/                          - Create event
    # GET    /api/events/{id}/                     - Get event details

    # Custom event actions
    # GET    /api/events/{id}/summary/             - Payment progress
    # POST   /api/events/{id}/confirm/             - Confirm draft (organizer)
    # POST   /api/events/{id}/report_payment/      - Report own payment
    # GET    /api/events/unpaid/                   - Events still to pay

    # Include router URLs
    path('', include(router.urls)),
]
