from rest_framework import serializers
from django.contrib.auth import get_user_model
from accounts.models import Role
from okr_app.utils import LabelChoiceField

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Hashes the password on create/update and exposes the role by label."""
    password = serializers.CharField(write_only=True, min_length=8, required=False)
    role     = LabelChoiceField(choices=Role.choices)

    class Meta:
        model = User
        fields = ["user_id", "username", "name", "email", "position", "role", "password", "created_at"]
        read_only_fields = ("user_id", "created_at")

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "This field is required."})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user

    def update(self, instance, validated_data):
        pwd = validated_data.pop("password", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if pwd:
            instance.set_password(pwd)
        instance.save()
        return instance
