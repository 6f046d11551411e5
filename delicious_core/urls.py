"""delicious_core URL Configuration

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import include, re_path
from rest_framework.authtoken.views import obtain_auth_token

from stores.router import router as stores_router
from .custom_default_router import CustomDefaultRouter

router = CustomDefaultRouter()
router.extend(stores_router)

urlpatterns = [
    re_path(r'^admin/', admin.site.urls),
    re_path(r'^obtain-auth-token/$', obtain_auth_token),
    re_path(r'^api-auth/', include('rest_framework.urls')),
    re_path(r'^', include(router.urls)),
]
