from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # Current user profile
    # GET    /api/auth/me/   - Profile
    # PUT    /api/auth/me/   - Update name / password
    # DELETE /api/auth/me/   - Delete account (password required)
    path('me/', views.current_user, name='current-user'),

    # Push notifications
    path('push-token/', views.update_push_token_view, name='push-token'),
]
