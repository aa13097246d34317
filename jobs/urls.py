from django.urls import path
from .views import (
    ApplicationAnswersView, ApplicationDetailView, ApplicationListCreateView, ApplicationQuestionsView,
    ApplicationStatsView, CandidateCVDetailView, CandidateCVListView, CandidateCVPdfView, CandidateProfileView,
    CandidateStatsView, EmployerJobOfferDetailView, EmployerJobOfferListView, EmployerLocationDetailView,
    EmployerLocationListView, EmployerLogoUploadView, EmployerProfileView, EmployerStatsView,
    JobOfferApplicationStatsView, JobOfferApplicationStatusView, JobOfferApplicationsView, JobOfferToggleActiveView,
    PublicJobOfferDetailView, PublicJobOfferListView,
)

urlpatterns = [
    # Public
    path('job-offers/public/', PublicJobOfferListView.as_view(), name='public-job-offer-list'),
    path('job-offers/public/<int:pk>/', PublicJobOfferDetailView.as_view(), name='public-job-offer-detail'),

    # Employer job offers
    path('job-offers/', EmployerJobOfferListView.as_view(), name='job-offer-list'),  # GET (mine), POST (create)
    path('job-offers/<int:pk>/', EmployerJobOfferDetailView.as_view(), name='job-offer-detail'),
    path('job-offers/<int:pk>/toggle-active/', JobOfferToggleActiveView.as_view(), name='job-offer-toggle-active'),
    path('job-offers/<int:pk>/applications/', JobOfferApplicationsView.as_view(), name='job-offer-applications'),
    path('job-offers/<int:pk>/applications/stats/', JobOfferApplicationStatsView.as_view(),
         name='job-offer-application-stats'),
    path('job-offers/<int:pk>/applications/<int:application_id>/', JobOfferApplicationStatusView.as_view(),
         name='job-offer-application-status'),

    # Employer profile
    path('employer/profile/', EmployerProfileView.as_view(), name='employer-profile'),
    path('employer/profile/logo/', EmployerLogoUploadView.as_view(), name='employer-logo'),
    path('employer/profile/locations/', EmployerLocationListView.as_view(), name='employer-locations'),
    path('employer/profile/locations/<int:pk>/', EmployerLocationDetailView.as_view(), name='employer-location-detail'),
    path('employer/stats/', EmployerStatsView.as_view(), name='employer-stats'),

    # Candidate profile & CVs
    path('candidate/profile/', CandidateProfileView.as_view(), name='candidate-profile'),
    path('candidate/profile/stats/', CandidateStatsView.as_view(), name='candidate-stats'),
    path('candidate/cvs/', CandidateCVListView.as_view(), name='candidate-cv-list'),
    path('candidate/cvs/<int:pk>/', CandidateCVDetailView.as_view(), name='candidate-cv-detail'),
    path('candidate/cvs/<int:pk>/pdf/', CandidateCVPdfView.as_view(), name='candidate-cv-pdf'),

    # Candidate applications
    path('applications/', ApplicationListCreateView.as_view(), name='application-list'),
    path('applications/stats/summary/', ApplicationStatsView.as_view(), name='application-stats'),
    path('applications/<int:pk>/', ApplicationDetailView.as_view(), name='application-detail'),
    path('applications/<int:pk>/answers/', ApplicationAnswersView.as_view(), name='application-answers'),
    path('applications/<int:pk>/questions/', ApplicationQuestionsView.as_view(), name='application-questions'),
]
