from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserSettings


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['is_active', 'created_at', 'updated_at']


class UserCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'password_confirm', 'first_name', 'last_name']

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords don't match"})
        return attrs

    def create(self, validated_data):
        validated_data.pop('password_confirm')
        password = validated_data.pop('password')
        user = User.objects.create(**validated_data, is_active=True)
        user.set_password(password)
        user.save()
        return user


class UserSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserSettings
        fields = ['gemini_api_key', 'default_task_view', 'theme']


class OwnedPrimaryKeyRelatedField(serializers.PrimaryKeyRelatedField):
    """Reference that only accepts records owned by the requesting user"""

    def get_queryset(self):
        queryset = super().get_queryset()
        request = self.context.get('request')
        if request is None or not request.user.is_authenticated:
            return queryset.none()
        return queryset.filter(user_id=request.user.pk)

    def to_internal_value(self, data):
        # References were checked when first written; resending the stored id
        # is accepted even after the target was deleted
        current_id = self._current_id()
        if current_id is not None and str(data) == str(current_id):
            return self.queryset.model(pk=current_id)
        return super().to_internal_value(data)

    def _current_id(self):
        instance = getattr(self.parent, 'instance', None)
        if instance is None or isinstance(instance, (list, tuple)) or not self.source:
            return None
        return instance.serializable_value(self.source)


class StringListField(serializers.ListField):
    child = serializers.CharField(allow_blank=False, max_length=100)

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('default', list)
        super().__init__(**kwargs)


class OwnedModelSerializer(serializers.ModelSerializer):
    """Drops optional keys whose value is None so unresolved fields are omitted"""
    omit_when_none = ()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        for field in self.omit_when_none:
            if data.get(field) is None:
                data.pop(field, None)
        return data
