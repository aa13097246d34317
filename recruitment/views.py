from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from jobonfire_core.exceptions import Conflict
from jobs.models import JobOffer
from jobs.utils import get_employer_profile
from users.permissions import IsEmployer
from .models import RecruitmentQuestion, RecruitmentTest
from .serializers import RecruitmentQuestionSerializer, RecruitmentTestSerializer
from .services import RecruitmentTestExists, create_recruitment_test, delete_question


class EmployerOwnedMixin:
    """
    Scopes lookups to the logged-in employer's job offers. Anything else is a 404.
    """
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_owned_job_offer(self, job_offer_id):
        profile = get_employer_profile(self.request.user)
        return get_object_or_404(JobOffer, pk=job_offer_id, employer_profile=profile)


# --- QUESTIONS ---

class JobOfferQuestionsView(EmployerOwnedMixin, generics.ListAPIView):
    serializer_class = RecruitmentQuestionSerializer

    def get_queryset(self):
        return self.get_owned_job_offer(self.kwargs['job_offer_id']).questions.all()


class QuestionCreateView(EmployerOwnedMixin, generics.CreateAPIView):
    serializer_class = RecruitmentQuestionSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job_offer = self.get_owned_job_offer(serializer.validated_data['job_offer_id'])
        question = serializer.save(job_offer=job_offer)
        return Response(
            {"message": "Question created", "question": RecruitmentQuestionSerializer(question).data},
            status=status.HTTP_201_CREATED,
        )


class QuestionDetailView(EmployerOwnedMixin, generics.UpdateAPIView, generics.DestroyAPIView):
    """
    PUT: Change the question text.
    DELETE: Remove the question and the answers given to it.
    """
    serializer_class = RecruitmentQuestionSerializer

    def get_queryset(self):
        profile = get_employer_profile(self.request.user)
        return RecruitmentQuestion.objects.filter(job_offer__employer_profile=profile)

    def destroy(self, request, *args, **kwargs):
        delete_question(self.get_object())
        return Response({"message": "Question deleted"})


# --- TESTS ---

class JobOfferTestView(EmployerOwnedMixin, APIView):
    def get(self, request, job_offer_id):
        job_offer = self.get_owned_job_offer(job_offer_id)
        test = get_object_or_404(RecruitmentTest, job_offer=job_offer)
        return Response({"test": RecruitmentTestSerializer(test).data})


class TestCreateView(EmployerOwnedMixin, APIView):
    def post(self, request):
        serializer = RecruitmentTestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        job_offer = self.get_owned_job_offer(serializer.validated_data['job_offer_id'])
        try:
            test = create_recruitment_test(job_offer, serializer.validated_data['test_json'])
        except RecruitmentTestExists:
            raise Conflict("Test already exists for this job offer. Use PUT to update.")

        return Response({"test": RecruitmentTestSerializer(test).data}, status=status.HTTP_201_CREATED)


class TestDetailView(EmployerOwnedMixin, generics.UpdateAPIView, generics.DestroyAPIView):
    serializer_class = RecruitmentTestSerializer

    def get_queryset(self):
        profile = get_employer_profile(self.request.user)
        return RecruitmentTest.objects.filter(job_offer__employer_profile=profile)

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response({"message": "Test deleted successfully"})
