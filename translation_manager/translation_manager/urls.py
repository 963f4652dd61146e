from django.contrib import admin
from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions
from rest_framework.routers import DefaultRouter

from .extra_views import GenerateTranslationsStartView, TaskStatusView
from .views import (
    ExportLanguageView,
    ExportMultipleLanguagesView,
    ExportNestedLanguageView,
    LanguageViewSet,
    TagViewSet,
    TranslationViewSet,
)

# DRF router for REST API viewsets
router = DefaultRouter()
router.register(r"translations", TranslationViewSet, basename="translation")
router.register(r"languages", LanguageViewSet, basename="language")
router.register(r"tags", TagViewSet, basename="tag")

# Schema view for Swagger and ReDoc documentation
schema_view = get_schema_view(
    openapi.Info(
        title="Translation Management API",
        default_version="v1",
        description="Store, search and export UI translations",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
    authentication_classes=[],
)

urlpatterns = [
    path("api/", include(router.urls)),
    path("api/export/", ExportMultipleLanguagesView.as_view(), name="export_multiple"),
    path("api/export/<str:language>/", ExportLanguageView.as_view(), name="export_language"),
    path("api/export/<str:language>/nested/", ExportNestedLanguageView.as_view(), name="export_language_nested"),
    path("api/generate/", GenerateTranslationsStartView.as_view(), name="generate_translations"),
    path("api/tasks/status/", TaskStatusView.as_view(), name="tasks_status"),
    path(
        "docs/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    path("admin/", admin.site.urls),
]
