"""
URL configuration for the triplanner project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('django-admin/', admin.site.urls),

    # Storefront + back office API routes
    path('api/', include('travel_backend.urls')),

    # JWT auth endpoints (access in JSON + `auth` cookie, refresh via HttpOnly cookie)
    path('', include('travel_backend.auth_urls')),
]
