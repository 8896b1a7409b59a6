from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'approvals'

router = DefaultRouter()
router.register(r'', views.ApprovalViewSet, basename='approval')

urlpatterns = [
    # GET    /api/approvals/            - Pending approvals of my events
    # POST   /api/approvals/approve/    - Approve participant rows
    path('', include(router.urls)),
]
