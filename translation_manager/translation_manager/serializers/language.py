from rest_framework import serializers

from ..models import Language


class LanguageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Language
        fields = ['id', 'code', 'name', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ('id', 'created_at', 'updated_at')

    def validate_code(self, value):
        # The code is part of every export cache key and client URL, so it is fixed once created
        if self.instance is not None and value != self.instance.code:
            raise serializers.ValidationError("The language code cannot be changed.")
        return value


class LanguageSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Language
        fields = ['id', 'code', 'name', 'is_active']
