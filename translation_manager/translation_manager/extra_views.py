import uuid

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import serializers, status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from .tasks import GENERATE_TRANSLATIONS_TASK, generate_translations_task, get_tasks_status, register_task


class GenerateTranslationsInput(serializers.Serializer):
    count = serializers.IntegerField(min_value=1000)
    batch_size = serializers.IntegerField(min_value=1, required=False, default=1000)


class GenerateTranslationsStartView(APIView):
    permission_classes = [IsAdminUser]

    @swagger_auto_schema(
        request_body=GenerateTranslationsInput,
        responses={202: openapi.Response(description='Task queued', examples={'application/json': {'task_id': '...'}})},
        operation_description="Queue bulk generation of test translations",
    )
    def post(self, request):
        serializer = GenerateTranslationsInput(data=request.data)
        serializer.is_valid(raise_exception=True)
        task_id = str(uuid.uuid4())
        register_task(GENERATE_TRANSLATIONS_TASK, task_id)
        generate_translations_task.apply_async(kwargs=serializer.validated_data, task_id=task_id)
        return Response({"task_id": task_id}, status=status.HTTP_202_ACCEPTED)


class TaskStatusView(APIView):
    permission_classes = [IsAdminUser]

    def get(self, request):
        return Response(get_tasks_status())
