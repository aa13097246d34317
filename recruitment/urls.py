from django.urls import path
from .views import (
    JobOfferQuestionsView, JobOfferTestView, QuestionCreateView, QuestionDetailView, TestCreateView, TestDetailView,
)

urlpatterns = [
    # Questions
    path('recruitment-questions/', QuestionCreateView.as_view(), name='question-create'),
    path('recruitment-questions/job/<int:job_offer_id>/', JobOfferQuestionsView.as_view(), name='job-offer-questions'),
    path('recruitment-questions/<int:pk>/', QuestionDetailView.as_view(), name='question-detail'),  # PUT, DELETE

    # Tests
    path('recruitment-tests/', TestCreateView.as_view(), name='test-create'),
    path('recruitment-tests/job/<int:job_offer_id>/', JobOfferTestView.as_view(), name='job-offer-test'),
    path('recruitment-tests/<int:pk>/', TestDetailView.as_view(), name='test-detail'),  # PUT, DELETE
]
