"""
Factories for test data, built with factory_boy.
"""
import datetime

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone
from factory.django import DjangoModelFactory

from jobs.models import (
    ApplicationForJobOffer, CandidateCV, CandidateProfile, EmployerProfile, JobOffer, Localization,
)
from meetings.models import Meeting
from recruitment.models import CandidateAnswer, RecruitmentQuestion, RecruitmentTest

User = get_user_model()

PASSWORD = 'Secret123!'


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f'user{n}')
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    role = User.Roles.CANDIDATE
    password = factory.django.Password(PASSWORD)


class EmployerProfileFactory(DjangoModelFactory):
    class Meta:
        model = EmployerProfile

    user = factory.SubFactory(UserFactory, role=User.Roles.EMPLOYER)
    company_name = factory.Sequence(lambda n: f'Company {n}')
    industry = factory.LazyFunction(lambda: ['Software'])


class CandidateProfileFactory(DjangoModelFactory):
    class Meta:
        model = CandidateProfile

    user = factory.SubFactory(UserFactory, role=User.Roles.CANDIDATE)
    name = 'Anna'
    last_name = 'Nowak'


class LocalizationFactory(DjangoModelFactory):
    class Meta:
        model = Localization

    city = 'Warsaw'
    state = 'Mazowieckie'
    street = 'Prosta 51'
    postal_code = '00-838'


class JobOfferFactory(DjangoModelFactory):
    class Meta:
        model = JobOffer

    employer_profile = factory.SubFactory(EmployerProfileFactory)
    name = factory.Sequence(lambda n: f'Developer position {n}')
    description = 'Build things.'
    contract_type = 'B2B contract'
    workload = 'Full-time'
    working_mode = factory.LazyFunction(lambda: ['Remote'])
    tags = factory.LazyFunction(lambda: ['Python'])
    expire_date = factory.LazyFunction(lambda: timezone.now() + datetime.timedelta(days=30))
    is_active = True


class CandidateCVFactory(DjangoModelFactory):
    class Meta:
        model = CandidateCV

    candidate_profile = factory.SubFactory(CandidateProfileFactory)
    name = factory.Sequence(lambda n: f'CV {n}')
    cv_json = factory.LazyFunction(lambda: {'fullName': 'Anna Nowak', 'summary': 'Frontend developer'})


class ApplicationFactory(DjangoModelFactory):
    class Meta:
        model = ApplicationForJobOffer

    job_offer = factory.SubFactory(JobOfferFactory)
    candidate_profile = factory.SubFactory(CandidateProfileFactory)
    cv = factory.SubFactory(CandidateCVFactory, candidate_profile=factory.SelfAttribute('..candidate_profile'))
    message = 'I would like to join.'


class RecruitmentQuestionFactory(DjangoModelFactory):
    class Meta:
        model = RecruitmentQuestion

    job_offer = factory.SubFactory(JobOfferFactory)
    question = factory.Sequence(lambda n: f'Question {n}?')


class CandidateAnswerFactory(DjangoModelFactory):
    class Meta:
        model = CandidateAnswer

    application = factory.SubFactory(ApplicationFactory)
    question = factory.SubFactory(
        RecruitmentQuestionFactory,
        job_offer=factory.SelfAttribute('..application.job_offer'),
    )
    answer = 'My answer.'


class RecruitmentTestFactory(DjangoModelFactory):
    class Meta:
        model = RecruitmentTest

    job_offer = factory.SubFactory(JobOfferFactory)
    test_json = factory.LazyFunction(lambda: {'questions': [{'text': '2 + 2?', 'answer': '4'}]})


class MeetingFactory(DjangoModelFactory):
    class Meta:
        model = Meeting

    application = factory.SubFactory(ApplicationFactory)
    date_time = factory.LazyFunction(lambda: timezone.now() + datetime.timedelta(days=7))
    type = Meeting.Type.ONLINE
    online_meeting_url = 'https://meet.example.com/interview'
