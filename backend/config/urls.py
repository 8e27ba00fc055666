"""
URL configuration for the Auto Shop project.
"""

from django.contrib import admin
from django.urls import path, include
from django.views.generic.base import RedirectView

urlpatterns = [
    # Redirect root to the API
    path('', RedirectView.as_view(url='/api/v1/', permanent=False), name='index'),

    # Admin
    path('admin/', admin.site.urls),

    # API v1
    path('api/v1/', include('presentation.api.v1.urls')),
]
