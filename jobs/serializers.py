import os

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from recruitment.serializers import AnswerInputSerializer, CandidateAnswerSerializer, QuestionTextSerializer
from .constants import (
    CONTRACT_TYPES, CV_ALLOWED_EXTENSIONS, MAX_JOB_LEVELS, MAX_LIST_ITEMS, MAX_TAGS, MAX_WORKING_MODES,
)
from .models import (
    ApplicationForJobOffer, ApplicationResponse, CandidateCV, CandidateProfile, EmployerProfile, JobOffer,
    Localization, ProfileLink,
)

SKILL_LEVELS = ['BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT']


def _string_list(max_items, max_length):
    return serializers.ListField(
        child=serializers.CharField(max_length=max_length),
        max_length=max_items,
        required=False,
        allow_empty=True,
    )


# --- PROFILES ---

class LocalizationSerializer(serializers.ModelSerializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False, allow_null=True)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False, allow_null=True)

    class Meta:
        model = Localization
        fields = ['id', 'city', 'state', 'street', 'postal_code', 'latitude', 'longitude']


class EmployerProfileSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(min_length=2, max_length=100)
    industry = _string_list(MAX_LIST_ITEMS, 100)
    contract_type = serializers.ListField(
        child=serializers.ChoiceField(choices=CONTRACT_TYPES),
        required=False,
    )
    benefits = _string_list(MAX_LIST_ITEMS, 1000)
    localizations = LocalizationSerializer(many=True, read_only=True)

    class Meta:
        model = EmployerProfile
        fields = [
            'id', 'company_name', 'company_image_url', 'company_logo', 'industry', 'description',
            'contract_type', 'contact_phone', 'contact_email', 'benefits', 'localizations',
        ]
        read_only_fields = ['company_logo']


class EmployerLogoSerializer(serializers.ModelSerializer):
    company_logo = serializers.ImageField(required=True)

    class Meta:
        model = EmployerProfile
        fields = ['company_logo']


class EmployerSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = EmployerProfile
        fields = ['id', 'company_name', 'company_image_url', 'industry']


class ProfileLinkSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProfileLink
        fields = ['id', 'name', 'url']


class CandidateProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)
    name = serializers.CharField(min_length=2, max_length=50, required=False, allow_blank=True, allow_null=True)
    last_name = serializers.CharField(min_length=2, max_length=50, required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True, allow_null=True)
    phone_number = serializers.IntegerField(min_value=100000000, max_value=999999999, required=False, allow_null=True)
    profile_links = ProfileLinkSerializer(many=True, required=False)

    class Meta:
        model = CandidateProfile
        fields = [
            'id', 'username', 'email', 'name', 'last_name', 'description', 'birthday', 'experience',
            'skills', 'education', 'phone_number', 'place', 'profile_links',
        ]

    @staticmethod
    def _require_keys(items, keys, label):
        if items is None:
            return items
        if not isinstance(items, list):
            raise serializers.ValidationError(f"{label} must be a list.")
        for item in items:
            if not isinstance(item, dict):
                raise serializers.ValidationError(f"Each {label.lower()} entry must be an object.")
            missing = [key for key in keys if not item.get(key)]
            if missing:
                raise serializers.ValidationError(f"Missing {', '.join(missing)} in {label.lower()} entry.")
        return items

    def validate_experience(self, value):
        return self._require_keys(value, ['company', 'position', 'start_date'], 'Experience')

    def validate_education(self, value):
        return self._require_keys(value, ['institution', 'degree', 'start_date'], 'Education')

    def validate_skills(self, value):
        value = self._require_keys(value, ['name', 'level'], 'Skills')
        for skill in value or []:
            if skill['level'] not in SKILL_LEVELS:
                raise serializers.ValidationError(f"Skill level must be one of: {', '.join(SKILL_LEVELS)}.")
        return value

    def update(self, instance, validated_data):
        links_data = validated_data.pop('profile_links', None)
        # Update main profile
        instance = super().update(instance, validated_data)

        # Links are replaced as a whole when supplied
        if links_data is not None:
            instance.profile_links.all().delete()
            for link in links_data:
                ProfileLink.objects.create(candidate_profile=instance, name=link['name'], url=link['url'])
        return instance


class CandidateCVSerializer(serializers.ModelSerializer):
    class Meta:
        model = CandidateCV
        fields = ['id', 'name', 'cv_file', 'cv_json', 'created_at']
        read_only_fields = ['created_at']

    def validate_cv_file(self, value):
        if value is None:
            return value
        extension = os.path.splitext(value.name)[1].lower().lstrip('.')
        if extension not in CV_ALLOWED_EXTENSIONS:
            raise serializers.ValidationError(
                f"Unsupported file type. Allowed: {', '.join(CV_ALLOWED_EXTENSIONS)}."
            )
        if value.size > settings.MAX_UPLOAD_SIZE:
            raise serializers.ValidationError("File is too large.")
        return value

    def validate(self, data):
        cv_file = data.get('cv_file', getattr(self.instance, 'cv_file', None))
        cv_json = data.get('cv_json', getattr(self.instance, 'cv_json', None))
        if not cv_file and not cv_json:
            raise serializers.ValidationError("Either a CV file or CV data is required.")
        return data


class CVSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = CandidateCV
        fields = ['id', 'name', 'cv_file']


# --- JOB OFFERS ---

class JobOfferSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=3, max_length=200)
    description = serializers.CharField(max_length=5000, required=False, allow_blank=True)
    job_level = _string_list(MAX_JOB_LEVELS, 100)
    working_mode = _string_list(MAX_WORKING_MODES, 100)
    responsibilities = _string_list(MAX_LIST_ITEMS, 500)
    requirements = _string_list(MAX_LIST_ITEMS, 500)
    what_we_offer = _string_list(MAX_LIST_ITEMS, 500)
    tags = _string_list(MAX_TAGS, 50)
    localization = LocalizationSerializer(read_only=True)
    localization_id = serializers.PrimaryKeyRelatedField(
        source='localization',
        queryset=Localization.objects.all(),
        write_only=True,
        required=False,
        allow_null=True,
    )
    employer_profile = EmployerSummarySerializer(read_only=True)
    application_count = serializers.IntegerField(source='applications.count', read_only=True)

    class Meta:
        model = JobOffer
        fields = [
            'id', 'name', 'description', 'job_level', 'contract_type', 'salary', 'create_date', 'expire_date',
            'working_mode', 'workload', 'responsibilities', 'requirements', 'what_we_offer', 'application_url',
            'tags', 'is_active', 'localization', 'localization_id', 'employer_profile', 'application_count',
        ]
        read_only_fields = ['create_date', 'employer_profile', 'application_count']

    def validate_expire_date(self, value):
        if value <= timezone.now():
            raise serializers.ValidationError("Expire date must be in the future.")
        return value


class PublicJobOfferSerializer(JobOfferSerializer):
    questions = QuestionTextSerializer(many=True, read_only=True)

    class Meta(JobOfferSerializer.Meta):
        fields = JobOfferSerializer.Meta.fields + ['questions']


class JobOfferSummarySerializer(serializers.ModelSerializer):
    employer_profile = EmployerSummarySerializer(read_only=True)
    localization = LocalizationSerializer(read_only=True)

    class Meta:
        model = JobOffer
        fields = ['id', 'name', 'is_active', 'expire_date', 'employer_profile', 'localization']


# --- APPLICATIONS ---

class ApplicationResponseSerializer(serializers.ModelSerializer):
    class Meta:
        model = ApplicationResponse
        fields = ['response', 'updated_at']


class ApplicationSerializer(serializers.ModelSerializer):
    """
    An application as the candidate sees it.
    """
    job_offer = JobOfferSummarySerializer(read_only=True)
    cv = CVSummarySerializer(read_only=True)
    answers = CandidateAnswerSerializer(many=True, read_only=True)
    response = ApplicationResponseSerializer(read_only=True)

    class Meta:
        model = ApplicationForJobOffer
        fields = ['id', 'job_offer', 'cv', 'message', 'status', 'answers', 'response', 'created_at']
        read_only_fields = fields


class ApplicationCreateSerializer(serializers.Serializer):
    job_offer_id = serializers.IntegerField(min_value=1)
    cv_id = serializers.IntegerField(min_value=1)
    message = serializers.CharField(max_length=2000, allow_blank=True, required=False, default='')
    answers = AnswerInputSerializer(many=True, required=False)


class ApplicationUpdateSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000, allow_blank=True, required=False)
    status = serializers.ChoiceField(choices=ApplicationForJobOffer.Status.choices, required=False)


class AnswersReplaceSerializer(serializers.Serializer):
    answers = AnswerInputSerializer(many=True)


class ApplicantSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    email = serializers.CharField(source='user.email', read_only=True)

    class Meta:
        model = CandidateProfile
        fields = ['id', 'user_id', 'username', 'email', 'name', 'last_name', 'phone_number']


class EmployerApplicationSerializer(serializers.ModelSerializer):
    """
    An application as the employer who owns the job offer sees it.
    """
    candidate_profile = ApplicantSerializer(read_only=True)
    cv = CVSummarySerializer(read_only=True)
    answers = CandidateAnswerSerializer(many=True, read_only=True)
    response = ApplicationResponseSerializer(read_only=True)

    class Meta:
        model = ApplicationForJobOffer
        fields = ['id', 'job_offer_id', 'candidate_profile', 'cv', 'message', 'status', 'answers', 'response',
                  'created_at']
        read_only_fields = fields


class ApplicationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[
        ApplicationForJobOffer.Status.PENDING,
        ApplicationForJobOffer.Status.ACCEPTED,
        ApplicationForJobOffer.Status.REJECTED,
    ])
    response = serializers.CharField(required=False, allow_blank=True)


class ApplicationQuestionSerializer(QuestionTextSerializer):
    current_answer = serializers.SerializerMethodField()

    class Meta(QuestionTextSerializer.Meta):
        fields = QuestionTextSerializer.Meta.fields + ['current_answer']

    def get_current_answer(self, obj):
        application_id = self.context['application_id']
        answer = next((a for a in obj.answers.all() if a.application_id == application_id), None)
        return answer.answer if answer else None
