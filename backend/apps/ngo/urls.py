from django.apps import apps as django_apps
from django.urls import path

from .views import (
    CategoryDetailView,
    CategoryListCreateView,
    DonorListCreateView,
    LoginView,
    ProgramDetailView,
    ProgramListView,
    ProgramStatusView,
)

_config = django_apps.get_app_config("ngo")
_stores = {"gateway": _config.gateway, "admin": _config.admin}

urlpatterns = [
    path("donors", DonorListCreateView.as_view(**_stores), name="donor-list"),
    path("login", LoginView.as_view(**_stores), name="login"),
    path("categories", CategoryListCreateView.as_view(**_stores), name="category-list"),
    path("categories/<str:category_id>", CategoryDetailView.as_view(**_stores), name="category-detail"),
    path("programs", ProgramListView.as_view(**_stores), name="program-list"),
    path("programs/<str:program_id>", ProgramDetailView.as_view(**_stores), name="program-detail"),
    path("programs/<str:program_id>/status", ProgramStatusView.as_view(**_stores), name="program-status"),
]
