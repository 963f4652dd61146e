from rest_framework import serializers

from ..models import Language, Translation
from .language import LanguageSummarySerializer
from .tag import TagSummarySerializer


class TranslationSerializer(serializers.ModelSerializer):
    language_id = serializers.IntegerField(read_only=True)
    language = LanguageSummarySerializer(read_only=True)
    tags = TagSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Translation
        fields = ['id', 'language_id', 'key', 'value', 'created_at', 'updated_at', 'language', 'tags']
        read_only_fields = fields


class TranslationCreateSerializer(serializers.Serializer):
    language_id = serializers.PrimaryKeyRelatedField(queryset=Language.objects.all())
    key = serializers.CharField(max_length=255)
    value = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField(max_length=255), required=False)


class TranslationUpdateSerializer(serializers.Serializer):
    value = serializers.CharField(required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=255), required=False)

