from django.urls import path
from .views import RegisterView, MeView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    # Auth
    path('register/', RegisterView.as_view(), name='register'),
    path('login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),  # username or email + password
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Current account
    path('me/', MeView.as_view(), name='me'),  # GET, DELETE (anonymize)
]
