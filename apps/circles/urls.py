from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'circles'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.CircleViewSet, basename='circle')

urlpatterns = [
    # Circle ViewSet routes
    # GET    /api/circles/                        - List user's circles
    # POST   /api/circles/                        - Create circle
    # GET    /api/circles/{id}/                   - Get circle details

    # Custom circle actions
    # GET    /api/circles/{id}/members/           - List active members
    # POST   /api/circles/{id}/join/              - Join circle
    # POST   /api/circles/{id}/leave/             - Leave circle
    # POST   /api/circles/{id}/remove_member/     - Remove member (creator)
    # POST   /api/circles/{id}/primary/           - Set as primary circle
    # POST   /api/circles/join_by_name/           - Join by exact name
    # GET    /api/circles/search/?q=              - Search by name

    # Include router URLs
    path('', include(router.urls)),
]
