import logging

from django.db.models import Prefetch, Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from recruitment.models import CandidateAnswer
from users.permissions import IsCandidate, IsEmployer
from .models import ApplicationForJobOffer, CandidateCV, JobOffer
from .pagination import PagePagination, PublicJobOfferPagination
from .pdf import PdfRenderError, render_cv_pdf
from .serializers import (
    AnswersReplaceSerializer, ApplicationCreateSerializer, ApplicationQuestionSerializer, ApplicationSerializer,
    ApplicationStatusSerializer, ApplicationUpdateSerializer, CandidateCVSerializer, CandidateProfileSerializer,
    EmployerApplicationSerializer, EmployerLogoSerializer, EmployerProfileSerializer, JobOfferSerializer,
    LocalizationSerializer, PublicJobOfferSerializer,
)
from .services import (
    ApplicationError, ApplicationManager, JobOfferNotFound, application_status_summary,
    delete_or_deactivate_job_offer,
)
from .utils import get_candidate_profile, get_employer_profile

logger = logging.getLogger(__name__)

SORT_FIELDS = ('create_date', 'name', 'expire_date')


def _error_response(exc):
    return Response({"message": exc.message, **exc.details}, status=exc.status_code)


def _status_filter(queryset, request):
    status_param = request.query_params.get('status')
    if not status_param:
        return queryset
    if status_param not in ApplicationForJobOffer.Status.values:
        raise ValidationError({"status": f"Must be one of: {', '.join(ApplicationForJobOffer.Status.values)}."})
    return queryset.filter(status=status_param)


# --- PUBLIC JOB SEARCH ---

class PublicJobOfferListView(generics.ListAPIView):
    """
    Active, unexpired offers with search, filters and sorting.
    """
    serializer_class = PublicJobOfferSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = PublicJobOfferPagination

    def get_queryset(self):
        params = self.request.query_params
        queryset = JobOffer.objects.open().select_related('employer_profile', 'localization') \
            .prefetch_related('questions', 'applications')

        search = params.get('search')
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(description__icontains=search))

        if params.get('contract_type'):
            queryset = queryset.filter(contract_type__iexact=params['contract_type'])
        if params.get('working_mode'):
            queryset = queryset.filter(working_mode__icontains=params['working_mode'])
        if params.get('workload'):
            queryset = queryset.filter(workload__iexact=params['workload'])
        if params.get('city'):
            queryset = queryset.filter(localization__city__icontains=params['city'])
        if params.get('state'):
            queryset = queryset.filter(localization__state__icontains=params['state'])
        if params.get('company_name'):
            queryset = queryset.filter(employer_profile__company_name__icontains=params['company_name'])

        # Offer must carry every requested tag
        for tag in filter(None, (t.strip() for t in params.get('tags', '').split(','))):
            queryset = queryset.filter(tags__icontains=tag)

        sort_by = params.get('sort_by', 'create_date')
        if sort_by not in SORT_FIELDS:
            sort_by = 'create_date'
        prefix = '' if params.get('sort_order') == 'asc' else '-'
        return queryset.order_by(f'{prefix}{sort_by}', '-id')


class PublicJobOfferDetailView(generics.RetrieveAPIView):
    serializer_class = PublicJobOfferSerializer
    permission_classes = [permissions.AllowAny]

    def get_queryset(self):
        return JobOffer.objects.open().select_related('employer_profile', 'localization')


# --- EMPLOYER JOB OFFERS ---

class EmployerJobOfferMixin:
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_job_offers(self):
        profile = get_employer_profile(self.request.user)
        return JobOffer.objects.filter(employer_profile=profile)

    def get_job_offer(self):
        return get_object_or_404(self.get_job_offers(), pk=self.kwargs['pk'])

    def check_localization(self, serializer):
        localization = serializer.validated_data.get('localization')
        profile = get_employer_profile(self.request.user)
        if localization is not None and not profile.localizations.filter(pk=localization.pk).exists():
            raise ValidationError({"localization_id": "Location does not belong to this employer."})


class EmployerJobOfferListView(EmployerJobOfferMixin, generics.ListCreateAPIView):
    """
    GET: My job offers.
    POST: Publish a new job offer.
    """
    serializer_class = JobOfferSerializer
    pagination_class = PagePagination

    def get_queryset(self):
        return self.get_job_offers().select_related('employer_profile', 'localization')

    def perform_create(self, serializer):
        self.check_localization(serializer)
        job_offer = serializer.save(employer_profile=get_employer_profile(self.request.user))
        logger.info("Job offer %s created by employer %s", job_offer.id, job_offer.employer_profile_id)


class EmployerJobOfferDetailView(EmployerJobOfferMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET/PUT/PATCH: Manage one of my job offers.
    DELETE: Deletes the offer, or only deactivates it when candidates applied.
    """
    serializer_class = JobOfferSerializer

    def get_queryset(self):
        return self.get_job_offers().select_related('employer_profile', 'localization')

    def perform_update(self, serializer):
        self.check_localization(serializer)
        serializer.save()

    def destroy(self, request, *args, **kwargs):
        job_offer = self.get_object()
        try:
            result = delete_or_deactivate_job_offer(job_offer.id)
        except JobOfferNotFound:
            raise NotFound("Job offer not found.")

        if result.mode == 'deactivated':
            message = "Job offer has applications, so it was deactivated instead of deleted."
        else:
            message = "Job offer deleted."
        return Response({"message": message, "result": result.as_dict()}, status=status.HTTP_200_OK)


class JobOfferToggleActiveView(EmployerJobOfferMixin, APIView):
    def patch(self, request, pk):
        job_offer = self.get_job_offer()
        job_offer.is_active = not job_offer.is_active
        job_offer.save(update_fields=['is_active'])
        return Response({
            "message": f"Job offer {'activated' if job_offer.is_active else 'deactivated'}.",
            "is_active": job_offer.is_active,
        })


class JobOfferApplicationsView(EmployerJobOfferMixin, generics.ListAPIView):
    """
    Applications received for one of my job offers.
    """
    serializer_class = EmployerApplicationSerializer
    pagination_class = PagePagination

    def get_queryset(self):
        job_offer = self.get_job_offer()
        queryset = job_offer.applications.select_related('candidate_profile__user', 'cv', 'response') \
            .prefetch_related('answers__question')
        return _status_filter(queryset, self.request)


class JobOfferApplicationStatusView(EmployerJobOfferMixin, APIView):
    """
    PUT: Accept, reject or reset an application, optionally with a written response.
    """

    def put(self, request, pk, application_id):
        job_offer = self.get_job_offer()
        application = get_object_or_404(ApplicationForJobOffer, pk=application_id, job_offer=job_offer)

        serializer = ApplicationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ApplicationManager.set_status(
                application,
                serializer.validated_data['status'],
                serializer.validated_data.get('response'),
            )
        except ApplicationError as exc:
            return _error_response(exc)

        application.refresh_from_db()
        return Response({
            "message": "Application status updated.",
            "application": EmployerApplicationSerializer(application).data,
        })


class JobOfferApplicationStatsView(EmployerJobOfferMixin, APIView):
    def get(self, request, pk):
        job_offer = self.get_job_offer()
        return Response({
            "job_offer_id": job_offer.id,
            "stats": application_status_summary(job_offer.applications.all()),
        })


# --- EMPLOYER PROFILE ---

class EmployerProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = EmployerProfileSerializer
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_object(self):
        return get_employer_profile(self.request.user)


class EmployerLogoUploadView(APIView):
    """
    Upload a company logo image.
    """
    permission_classes = [permissions.IsAuthenticated, IsEmployer]
    parser_classes = (MultiPartParser, FormParser)

    def post(self, request):
        profile = get_employer_profile(request.user)
        serializer = EmployerLogoSerializer(profile, data=request.data)

        if serializer.is_valid():
            serializer.save()
            return Response({
                "message": "Logo uploaded.",
                "company_logo": EmployerProfileSerializer(profile, context={'request': request}).data['company_logo'],
            })

        return Response({"message": "Validation failed", "errors": serializer.errors},
                        status=status.HTTP_400_BAD_REQUEST)


class EmployerStatsView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get(self, request):
        profile = get_employer_profile(request.user)
        job_offers = JobOffer.objects.filter(employer_profile=profile)
        summary = application_status_summary(ApplicationForJobOffer.objects.filter(job_offer__employer_profile=profile))

        return Response({
            "total_job_offers": job_offers.count(),
            "active_job_offers": job_offers.filter(is_active=True).count(),
            "total_applications": summary['total'],
            "pending_applications": summary['pending'],
            "accepted_applications": summary['accepted'],
            "rejected_applications": summary['rejected'],
        })


class EmployerLocationListView(generics.ListCreateAPIView):
    serializer_class = LocalizationSerializer
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_queryset(self):
        return get_employer_profile(self.request.user).localizations.all()

    def perform_create(self, serializer):
        location = serializer.save()
        get_employer_profile(self.request.user).localizations.add(location)


class EmployerLocationDetailView(generics.DestroyAPIView):
    """
    Unlinks the location from my profile. Offers that use it keep it.
    """
    permission_classes = [permissions.IsAuthenticated, IsEmployer]

    def get_queryset(self):
        return get_employer_profile(self.request.user).localizations.all()

    def destroy(self, request, *args, **kwargs):
        location = self.get_object()
        get_employer_profile(request.user).localizations.remove(location)
        return Response({"message": "Location removed."})


# --- CANDIDATE PROFILE & CVs ---

class CandidateProfileView(generics.RetrieveUpdateAPIView):
    """
    Manage your profile. Profile links sent on update replace the existing ones.
    """
    serializer_class = CandidateProfileSerializer
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get_object(self):
        return get_candidate_profile(self.request.user)


class CandidateStatsView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get(self, request):
        profile = get_candidate_profile(request.user)
        summary = application_status_summary(profile.applications.all())

        return Response({"stats": {
            "total_applications": summary['total'],
            "pending_applications": summary['pending'],
            "accepted_applications": summary['accepted'],
            "rejected_applications": summary['rejected'],
            "total_cvs": profile.cvs.filter(is_deleted=False).count(),
            "total_profile_links": profile.profile_links.count(),
            "experience_count": len(profile.experience or []),
            "skills_count": len(profile.skills or []),
            "education_count": len(profile.education or []),
        }})


class CandidateCVListView(generics.ListCreateAPIView):
    """
    GET: My CVs.
    POST: Upload a CV file (PDF/DOC/DOCX) or save a generated JSON CV.
    """
    serializer_class = CandidateCVSerializer
    permission_classes = [permissions.IsAuthenticated, IsCandidate]
    parser_classes = (MultiPartParser, FormParser, JSONParser)

    def get_queryset(self):
        return get_candidate_profile(self.request.user).cvs.filter(is_deleted=False)

    def perform_create(self, serializer):
        serializer.save(candidate_profile=get_candidate_profile(self.request.user))


class CandidateCVDetailView(generics.RetrieveDestroyAPIView):
    serializer_class = CandidateCVSerializer
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get_queryset(self):
        return get_candidate_profile(self.request.user).cvs.filter(is_deleted=False)

    def perform_destroy(self, instance):
        # Applications keep pointing at the CV they were sent with
        instance.is_deleted = True
        instance.save(update_fields=['is_deleted'])


class CandidateCVPdfView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get(self, request, pk):
        profile = get_candidate_profile(request.user)
        cv = get_object_or_404(CandidateCV, pk=pk, candidate_profile=profile, is_deleted=False)

        if not cv.cv_json:
            return Response({"message": "This CV has no generated content to render."},
                            status=status.HTTP_400_BAD_REQUEST)

        try:
            pdf = render_cv_pdf(cv)
        except PdfRenderError:
            return Response({"message": "Could not generate PDF."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        response = HttpResponse(pdf, content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="cv_{cv.id}.pdf"'
        return response


# --- CANDIDATE APPLICATIONS ---

class CandidateApplicationMixin:
    permission_classes = [permissions.IsAuthenticated, IsCandidate]

    def get_applications(self):
        profile = get_candidate_profile(self.request.user)
        return ApplicationForJobOffer.objects.filter(candidate_profile=profile) \
            .select_related('job_offer__employer_profile', 'job_offer__localization', 'cv', 'response') \
            .prefetch_related('answers__question')

    def get_application(self):
        return get_object_or_404(self.get_applications(), pk=self.kwargs['pk'])


class ApplicationListCreateView(CandidateApplicationMixin, generics.ListCreateAPIView):
    """
    GET: My applications.
    POST: Apply for a job offer with a CV and answers to its questions.
    """
    serializer_class = ApplicationSerializer
    pagination_class = PagePagination

    def get_queryset(self):
        return _status_filter(self.get_applications(), self.request)

    def create(self, request, *args, **kwargs):
        serializer = ApplicationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        profile = get_candidate_profile(request.user)
        cv = CandidateCV.objects.filter(pk=data['cv_id'], candidate_profile=profile, is_deleted=False).first()
        if cv is None:
            raise NotFound("CV not found or does not belong to this candidate.")

        try:
            application = ApplicationManager.apply(
                profile,
                data['job_offer_id'],
                cv,
                message=data.get('message', ''),
                answers=data.get('answers'),
            )
        except JobOfferNotFound:
            raise NotFound("Job offer not found or no longer active.")
        except ApplicationError as exc:
            return _error_response(exc)

        application = self.get_applications().get(pk=application.pk)
        return Response({
            "message": "Application submitted.",
            "application": ApplicationSerializer(application).data,
        }, status=status.HTTP_201_CREATED)


class ApplicationDetailView(CandidateApplicationMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET: One of my applications.
    PUT/PATCH: Change the message or cancel a PENDING application.
    DELETE: Withdraw a PENDING or CANCELED application.
    """
    serializer_class = ApplicationSerializer

    def get_queryset(self):
        return self.get_applications()

    def update(self, request, *args, **kwargs):
        application = self.get_object()
        serializer = ApplicationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ApplicationManager.update_by_candidate(
                application,
                status=serializer.validated_data.get('status'),
                message=serializer.validated_data.get('message'),
            )
        except ApplicationError as exc:
            return _error_response(exc)

        return Response({
            "message": "Application updated.",
            "application": ApplicationSerializer(application).data,
        })

    def destroy(self, request, *args, **kwargs):
        application = self.get_object()
        try:
            ApplicationManager.withdraw(application)
        except ApplicationError as exc:
            return _error_response(exc)
        return Response({"message": "Application deleted."})


class ApplicationStatsView(CandidateApplicationMixin, APIView):
    def get(self, request):
        return Response({"stats": application_status_summary(self.get_applications())})


class ApplicationAnswersView(CandidateApplicationMixin, APIView):
    """
    PUT: Replace all answers of a PENDING application.
    """

    def put(self, request, pk):
        application = self.get_application()
        serializer = AnswersReplaceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ApplicationManager.replace_answers(application, serializer.validated_data['answers'])
        except ApplicationError as exc:
            return _error_response(exc)

        application = self.get_applications().get(pk=application.pk)
        return Response({
            "message": "Answers updated.",
            "application": ApplicationSerializer(application).data,
        })


class ApplicationQuestionsView(CandidateApplicationMixin, APIView):
    """
    The job offer's questions with this application's current answers.
    """

    def get(self, request, pk):
        application = self.get_application()
        questions = application.job_offer.questions.prefetch_related(
            Prefetch('answers', queryset=CandidateAnswer.objects.filter(application=application))
        )
        serializer = ApplicationQuestionSerializer(questions, many=True, context={'application_id': application.id})
        return Response({"application_id": application.id, "questions": serializer.data})
