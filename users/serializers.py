from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers

from jobs.models import CandidateProfile, EmployerProfile
from .services import is_anonymized_email, is_anonymized_username

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Standard User Serializer for reading user data.
    """
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'role', 'register_date']
        read_only_fields = fields


class RegistrationSerializer(serializers.Serializer):
    """
    Handles sign-up with role selection. The profile matching the role is
    created together with the user.
    """
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    role = serializers.ChoiceField(choices=User.Roles.choices)
    company_name = serializers.CharField(max_length=100, required=False, allow_blank=True)

    def validate_username(self, value):
        if is_anonymized_username(value):
            raise serializers.ValidationError("This username is reserved.")
        return value

    def validate_email(self, value):
        if is_anonymized_email(value):
            raise serializers.ValidationError("This email is reserved.")
        return value.lower()

    @transaction.atomic
    def create(self, validated_data):
        role = validated_data['role']

        user = User.objects.create_user(
            username=validated_data['username'],
            email=validated_data['email'],
            password=validated_data['password'],
            role=role,
        )

        if role == User.Roles.EMPLOYER:
            EmployerProfile.objects.create(
                user=user,
                company_name=validated_data.get('company_name') or user.username,
            )
        else:
            CandidateProfile.objects.create(user=user)
        return user
