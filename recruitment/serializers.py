from rest_framework import serializers
from .models import CandidateAnswer, RecruitmentQuestion, RecruitmentTest


class RecruitmentQuestionSerializer(serializers.ModelSerializer):
    job_offer_id = serializers.IntegerField()

    class Meta:
        model = RecruitmentQuestion
        fields = ['id', 'job_offer_id', 'question']

    def validate_question(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("question is required")
        return value

    def get_fields(self):
        fields = super().get_fields()
        # Questions cannot move between job offers
        if self.instance is not None:
            fields['job_offer_id'].read_only = True
        return fields


class QuestionTextSerializer(serializers.ModelSerializer):
    class Meta:
        model = RecruitmentQuestion
        fields = ['id', 'question']


class CandidateAnswerSerializer(serializers.ModelSerializer):
    question = QuestionTextSerializer(read_only=True)

    class Meta:
        model = CandidateAnswer
        fields = ['id', 'question', 'answer']


class AnswerInputSerializer(serializers.Serializer):
    recruitment_question_id = serializers.IntegerField(min_value=1)
    answer = serializers.CharField(max_length=1000, allow_blank=True, required=False, default='')


class RecruitmentTestSerializer(serializers.ModelSerializer):
    job_offer_id = serializers.IntegerField(min_value=1)

    class Meta:
        model = RecruitmentTest
        fields = ['id', 'job_offer_id', 'test_json', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate_test_json(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Test data must be a valid object.")
        return value

    def get_fields(self):
        fields = super().get_fields()
        # The owning job offer is fixed once the test exists
        if self.instance is not None:
            fields['job_offer_id'].read_only = True
        return fields
