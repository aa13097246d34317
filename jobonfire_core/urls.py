from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('users.urls')),
    path('api/', include('jobs.urls')),
    path('api/', include('recruitment.urls')),
    path('api/meetings/', include('meetings.urls')),
]

# Enable media handling in development (uploaded CVs and logos)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
