from __future__ import annotations

from rest_framework import serializers

from .services.normalization import is_canonical_status, normalize_status


class DonorCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(required=False, allow_null=True, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_null=True, allow_blank=True)
    password = serializers.CharField(max_length=128, trim_whitespace=False)

    def validate_email(self, value):
        return value or None


class DonorSerializer(serializers.Serializer):
    """Public donor representation; the password never leaves the server."""

    donor_id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.CharField(allow_null=True)
    phone = serializers.CharField(allow_null=True)
    created_at = serializers.CharField(allow_null=True)

    def to_representation(self, instance):
        data = dict(instance)
        created_at = data.get("created_at")
        if created_at is not None and not isinstance(created_at, str):
            data["created_at"] = created_at.isoformat()
        return {field: data.get(field) for field in self.fields}


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)


class CategoryCreateSerializer(serializers.Serializer):
    # Numeric ids are accepted; CharField stores them as text.
    category_id = serializers.CharField(max_length=32, required=False, allow_null=True, allow_blank=True)
    category_name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def validate_category_id(self, value):
        value = (value or "").strip()
        return value or None


class ProgramStatusSerializer(serializers.Serializer):
    status = serializers.CharField()

    def validate_status(self, value):
        code = normalize_status(value).code
        if not is_canonical_status(code):
            raise serializers.ValidationError(f"Unknown status {value!r}.")
        return code
