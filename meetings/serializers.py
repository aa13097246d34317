from rest_framework import serializers

from jobs.models import ApplicationForJobOffer
from .models import Meeting


class MeetingApplicationSerializer(serializers.ModelSerializer):
    job_offer_id = serializers.IntegerField(read_only=True)
    job_offer_name = serializers.CharField(source='job_offer.name', read_only=True)
    company_name = serializers.CharField(source='job_offer.employer_profile.company_name', read_only=True)
    candidate_name = serializers.SerializerMethodField()

    class Meta:
        model = ApplicationForJobOffer
        fields = ['id', 'status', 'job_offer_id', 'job_offer_name', 'company_name', 'candidate_name']

    def get_candidate_name(self, obj):
        profile = obj.candidate_profile
        full_name = " ".join(part for part in [profile.name, profile.last_name] if part)
        return full_name or profile.user.username


class MeetingSerializer(serializers.ModelSerializer):
    application = MeetingApplicationSerializer(read_only=True)
    application_id = serializers.IntegerField(write_only=True)
    online_meeting_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Meeting
        fields = ['id', 'application', 'application_id', 'date_time', 'type', 'contributors',
                  'online_meeting_url', 'message']

    def get_fields(self):
        fields = super().get_fields()
        # A meeting stays attached to the application it was scheduled for
        if self.instance is not None:
            fields['application_id'].read_only = True
        return fields
