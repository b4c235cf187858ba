from django.apps import apps as django_apps
from django.urls import path

from .views import CompanyListView

urlpatterns = [
    path('companies', CompanyListView.as_view(gateway=django_apps.get_app_config('ngo').gateway), name='company-list'),
]
