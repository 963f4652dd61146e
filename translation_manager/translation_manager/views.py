import logging

from django.db.models import Count
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Language, Tag
from .serializers import (
    LanguageSerializer,
    TagDetailSerializer,
    TagSerializer,
    TranslationCreateSerializer,
    TranslationSerializer,
    TranslationUpdateSerializer,
)
from .services import ExportCache, ExportService, TranslationStore, list_translations, search_translations

logger = logging.getLogger(__name__)

LANGUAGE_PATH_PARAMETER = openapi.Parameter(
    'language', openapi.IN_PATH, description="Language code (e.g. 'en', 'fr')", type=openapi.TYPE_STRING
)
PAGE_PARAMETER = openapi.Parameter('page', openapi.IN_QUERY, description="Page number", type=openapi.TYPE_INTEGER)

TRANSLATION_WRITE_RESPONSES = {
    404: 'Translation not found',
    422: 'Validation error or duplicate key',
    401: 'Unauthenticated',
    500: 'Server error',
}


class TranslationViewSet(viewsets.ViewSet):
    """
    Translations: list/filter, search, create, read, update and delete.
    Writes keep the translation row and its tags in one transaction.
    """
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'[0-9]+'

    def get_store(self):
        return TranslationStore(cache=ExportCache())

    def paged_response(self, result):
        data = TranslationSerializer(result.items, many=True).data
        return Response(result.to_payload(data, self.request))

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('key', openapi.IN_QUERY, description="Substring of the key", type=openapi.TYPE_STRING),
            openapi.Parameter('value', openapi.IN_QUERY, description="Substring of the value", type=openapi.TYPE_STRING),
            openapi.Parameter('language', openapi.IN_QUERY, description="Language code", type=openapi.TYPE_STRING),
            openapi.Parameter('tags', openapi.IN_QUERY, description="Comma separated tag names, any of which must match",
                              type=openapi.TYPE_STRING),
            PAGE_PARAMETER,
        ],
        responses={200: 'Paginated list of translations', 401: 'Unauthenticated'},
        operation_description="Returns a paginated list of translations with optional filters",
    )
    def list(self, request):
        result = list_translations(request.query_params, page=request.query_params.get('page'))
        return self.paged_response(result)

    @swagger_auto_schema(
        request_body=TranslationCreateSerializer,
        responses={201: TranslationSerializer, **TRANSLATION_WRITE_RESPONSES},
        operation_description="Creates a new translation with optional tags",
    )
    def create(self, request):
        serializer = TranslationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        translation = self.get_store().create(
            language_id=data['language_id'].pk,
            key=data['key'],
            value=data['value'],
            tags=data.get('tags'),
        )
        return Response(TranslationSerializer(translation).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(responses={200: TranslationSerializer, 404: 'Translation not found', 401: 'Unauthenticated'})
    def retrieve(self, request, pk=None):
        translation = self.get_store().get(pk)
        return Response(TranslationSerializer(translation).data)

    @swagger_auto_schema(
        request_body=TranslationUpdateSerializer,
        responses={200: TranslationSerializer, **TRANSLATION_WRITE_RESPONSES},
        operation_description="Updates an existing translation's value and/or tags",
    )
    def update(self, request, pk=None):
        serializer = TranslationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        translation = self.get_store().update(pk, value=data.get('value'), tags=data.get('tags'))
        return Response(TranslationSerializer(translation).data)

    @swagger_auto_schema(
        request_body=TranslationUpdateSerializer,
        responses={200: TranslationSerializer, **TRANSLATION_WRITE_RESPONSES},
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @swagger_auto_schema(responses={204: 'Translation deleted', 404: 'Translation not found', 401: 'Unauthenticated'})
    def destroy(self, request, pk=None):
        self.get_store().delete(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('query', openapi.IN_QUERY, description="Search query (minimum 2 characters)",
                              type=openapi.TYPE_STRING, required=True),
            openapi.Parameter('language', openapi.IN_QUERY, description="Language code", type=openapi.TYPE_STRING),
            PAGE_PARAMETER,
        ],
        responses={200: 'Paginated search results', 422: 'Validation error', 401: 'Unauthenticated'},
        operation_description="Search translations by key or value with an optional language filter",
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        result = search_translations(
            request.query_params.get('query'),
            language_code=request.query_params.get('language'),
            page=request.query_params.get('page'),
        )
        return self.paged_response(result)


class ExportView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_export_service(self):
        return ExportService(cache=ExportCache())


class ExportLanguageView(ExportView):
    @swagger_auto_schema(
        manual_parameters=[LANGUAGE_PATH_PARAMETER],
        responses={
            200: openapi.Response(
                description='Translations exported successfully',
                examples={
                    'application/json': {
                        'language': {'code': 'en', 'name': 'English'},
                        'translations': [{'key': 'welcome.message', 'value': 'Welcome'}],
                    }
                },
            ),
            404: 'Language not found or inactive',
        },
        operation_description="Returns translations for a specific language in a flat key-value format",
    )
    def get(self, request, language):
        return Response(self.get_export_service().export_flat(language))


class ExportNestedLanguageView(ExportView):
    @swagger_auto_schema(
        manual_parameters=[LANGUAGE_PATH_PARAMETER],
        responses={
            200: openapi.Response(
                description='Nested translations exported successfully',
                examples={'application/json': {'menu': {'home': {'title': 'Home', 'subtitle': 'Welcome'}}}},
            ),
            404: 'Language not found or inactive',
        },
        operation_description="Returns translations for a specific language as a nested object",
    )
    def get(self, request, language):
        return Response(self.get_export_service().export_nested(language))


class ExportMultipleLanguagesView(ExportView):
    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('languages', openapi.IN_QUERY, description="Comma separated language codes (e.g. 'en,fr,de')",
                              type=openapi.TYPE_STRING, required=True),
        ],
        responses={
            200: openapi.Response(
                description='Multiple languages exported successfully',
                examples={'application/json': {'en': [['welcome.message', 'Welcome']],
                                               'fr': [['welcome.message', 'Bienvenue']]}},
            ),
            422: 'The languages field is required',
        },
        operation_description="Returns [key, value] pairs for several languages; unknown or inactive codes are skipped",
    )
    def get(self, request):
        return Response(self.get_export_service().export_multi(request.query_params.get('languages')))


class LanguageViewSet(viewsets.ModelViewSet):
    queryset = Language.objects.all()
    serializer_class = LanguageSerializer
    permission_classes = [IsAuthenticated]

    def perform_update(self, serializer):
        language = serializer.save()
        # is_active and name both show up in exports
        ExportCache().invalidate(language.code)

    def perform_destroy(self, instance):
        code = instance.code
        instance.delete()
        ExportCache().invalidate(code)
        logger.info("Deleted language %s", code)


class TagViewSet(viewsets.ModelViewSet):
    serializer_class = TagSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Tag.objects.annotate(translations_count=Count('translations'))

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return TagDetailSerializer
        return TagSerializer
