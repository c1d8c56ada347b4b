from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'parties'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.PartyViewSet, basename='party')

urlpatterns = [
    # Party ViewSet routes
    # GET    /api/parties/                              - List user's parties
    # POST   /api/parties/                              - Create party
    # GET    /api/parties/{id}/                         - Party details (creator/participant)
    # PUT    /api/parties/{id}/                         - Update party (creator)
    # PATCH  /api/parties/{id}/                         - Update party (creator)
    # DELETE /api/parties/{id}/                         - Delete party (creator)

    # Nested actions
    # GET    /api/parties/{id}/participants/            - List participants
    # POST   /api/parties/{id}/participants/            - Add participant
    # DELETE /api/parties/{id}/participants/{user_id}/  - Remove participant (self or creator)
    # POST   /api/parties/{id}/items/                   - Add item (participant)
    # PUT    /api/parties/{id}/items/{item_id}/         - Update item (bringer)
    # PATCH  /api/parties/{id}/items/{item_id}/         - Update item (bringer)
    # DELETE /api/parties/{id}/items/{item_id}/         - Delete item (bringer)

    path('', include(router.urls)),
]
