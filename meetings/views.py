import datetime
import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import generics, permissions, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from jobs.models import ApplicationForJobOffer
from jobs.pagination import MeetingPagination
from jobs.utils import get_candidate_profile, get_employer_profile
from users.permissions import IsCandidate, IsEmployer
from .models import Meeting
from .serializers import MeetingSerializer

logger = logging.getLogger(__name__)


def _parse_bound(value, name, end_of_day=False):
    parsed = parse_datetime(value)
    if parsed is None:
        day = parse_date(value)
        if day is None:
            raise ValidationError({name: "Invalid date."})
        parsed = datetime.datetime.combine(day, datetime.time.max if end_of_day else datetime.time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def filter_by_date_range(queryset, params):
    """
    Apply the optional ?from= and ?to= bounds (inclusive) to meeting dates.

    A bare date in ?to= covers that whole day.
    """
    if params.get('from'):
        queryset = queryset.filter(date_time__gte=_parse_bound(params['from'], 'from'))
    if params.get('to'):
        queryset = queryset.filter(date_time__lte=_parse_bound(params['to'], 'to', end_of_day=True))
    return queryset


MEETING_RELATED = (
    'application__job_offer__employer_profile',
    'application__candidate_profile__user',
)


# --- CANDIDATE ---

class CandidateMeetingMixin:
    serializer_class = MeetingSerializer
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get_queryset(self):
        profile = get_candidate_profile(self.request.user)
        return Meeting.objects.filter(application__candidate_profile=profile).select_related(*MEETING_RELATED)


class CandidateMeetingListView(CandidateMeetingMixin, generics.ListAPIView):
    pagination_class = MeetingPagination

    def get_queryset(self):
        return filter_by_date_range(super().get_queryset(), self.request.query_params).order_by('date_time')


class CandidateMeetingDetailView(CandidateMeetingMixin, generics.RetrieveAPIView):
    pass


# --- EMPLOYER ---

class EmployerMeetingMixin:
    serializer_class = MeetingSerializer
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_queryset(self):
        profile = get_employer_profile(self.request.user)
        return Meeting.objects.filter(application__job_offer__employer_profile=profile) \
            .select_related(*MEETING_RELATED)


class EmployerMeetingListView(EmployerMeetingMixin, generics.ListCreateAPIView):
    """
    GET: Meetings scheduled for applications to my job offers.
    POST: Schedule a meeting for one of those applications.
    """
    pagination_class = MeetingPagination

    def get_queryset(self):
        return filter_by_date_range(super().get_queryset(), self.request.query_params).order_by('date_time')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = get_employer_profile(request.user)
        application = get_object_or_404(
            ApplicationForJobOffer,
            pk=serializer.validated_data.pop('application_id'),
            job_offer__employer_profile=profile,
        )
        meeting = serializer.save(application=application)
        logger.info("Meeting %s scheduled for application %s", meeting.id, application.id)

        return Response(
            {"message": "Meeting created", "meeting": MeetingSerializer(meeting).data},
            status=status.HTTP_201_CREATED,
        )


class EmployerMeetingDetailView(EmployerMeetingMixin, generics.RetrieveUpdateDestroyAPIView):
    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({"message": "Meeting deleted"})
