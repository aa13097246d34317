from django.urls import path
from .views import (
    CandidateMeetingDetailView, CandidateMeetingListView, EmployerMeetingDetailView, EmployerMeetingListView,
)

urlpatterns = [
    # Candidate
    path('candidate/', CandidateMeetingListView.as_view(), name='candidate-meetings'),
    path('candidate/<int:pk>/', CandidateMeetingDetailView.as_view(), name='candidate-meeting-detail'),

    # Employer
    path('employer/', EmployerMeetingListView.as_view(), name='employer-meetings'),  # GET, POST
    path('employer/<int:pk>/', EmployerMeetingDetailView.as_view(), name='employer-meeting-detail'),
]
