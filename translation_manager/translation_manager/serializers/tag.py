from rest_framework import serializers

from ..models import Tag, Translation


class TagSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ['id', 'name']


class TagSerializer(serializers.ModelSerializer):
    translations_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Tag
        fields = ['id', 'name', 'translations_count', 'created_at', 'updated_at']
        read_only_fields = ('id', 'created_at', 'updated_at')


class TaggedTranslationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Translation
        fields = ['id', 'language_id', 'key', 'value']


class TagDetailSerializer(TagSerializer):
    translations = TaggedTranslationSerializer(many=True, read_only=True)

    class Meta(TagSerializer.Meta):
        fields = TagSerializer.Meta.fields + ['translations']
