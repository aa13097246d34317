import datetime

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from jobs.models import ApplicationForJobOffer, CandidateCV, CandidateProfile, EmployerProfile, JobOffer, Localization
from meetings.models import Meeting
from recruitment.models import CandidateAnswer, RecruitmentQuestion

User = get_user_model()

QUESTIONS = [
    "Describe your biggest project challenge related to frontend performance.",
    "Which tools do you use to monitor the quality and stability of React applications?",
]

SKILLS = [
    {"name": "React", "level": "EXPERT"},
    {"name": "Next.js", "level": "ADVANCED"},
    {"name": "TypeScript", "level": "ADVANCED"},
    {"name": "GraphQL", "level": "INTERMEDIATE"},
    {"name": "Jest", "level": "ADVANCED"},
]

EXPERIENCE = [
    {
        "company": "CodeWave",
        "position": "Frontend Developer",
        "start_date": "2021-02-01",
        "end_date": "2023-07-31",
    },
    {
        "company": "BrightApps",
        "position": "Junior Frontend Developer",
        "start_date": "2019-05-01",
        "end_date": "2021-01-31",
    },
]

EDUCATION = [
    {
        "institution": "Warsaw University of Technology",
        "degree": "Master",
        "field": "Computer Science",
        "start_date": "2014-10-01",
    },
]


class Command(BaseCommand):
    help = (
        "Create demo data: an employer with a frontend job offer and two recruitment questions, "
        "and a candidate who applied with a CV and has a meeting scheduled. Safe to run repeatedly."
    )

    def _user(self, username, email, password, role):
        user, created = User.objects.get_or_create(
            email=email,
            defaults={'username': username, 'role': role},
        )
        if created:
            user.set_password(password)
        user.username = username
        user.is_deleted = False
        user.is_active = True
        user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding database with demo data...")

        # Employer
        employer_user = self._user('firetech', 'employer@jobonfire.com', 'Employer123!', User.Roles.EMPLOYER)
        employer, _ = EmployerProfile.objects.update_or_create(
            user=employer_user,
            defaults={
                'company_name': "FireTech Software",
                'company_image_url': "https://cdn.jobonfire.dev/logos/firetech.png",
                'industry': ["Software", "IT Services"],
                'description': "Software house building web and mobile applications for fintech, "
                               "e-commerce and HR.",
                'contract_type': ["Employment contract", "B2B contract"],
                'contact_phone': "+48 511 223 344",
                'contact_email': "hr@firetech.pl",
                'benefits': ["Private healthcare", "Training budget", "Hybrid work", "Sports card"],
            },
        )

        office, _ = Localization.objects.get_or_create(
            city="Warsaw",
            state="Mazowieckie",
            street="Prosta 51",
            postal_code="00-838",
            defaults={'latitude': 52.2318, 'longitude': 20.9965},
        )
        employer.localizations.add(office)

        offer, _ = JobOffer.objects.update_or_create(
            employer_profile=employer,
            name="Frontend Developer (React/Next.js)",
            defaults={
                'description': "Join the FireTech Software team and build web products for clients worldwide.",
                'job_level': ["Mid", "Senior"],
                'contract_type': "B2B contract",
                'salary': "18 000 - 24 000 PLN net (B2B)",
                'expire_date': timezone.now() + datetime.timedelta(days=45),
                'working_mode': ["Hybrid", "Remote"],
                'workload': "Full-time",
                'responsibilities': [
                    "Develop and maintain frontend applications built with Next.js and TypeScript",
                    "Work closely with the UX/UI and backend teams",
                    "Keep code quality and automated test coverage high",
                ],
                'requirements': [
                    "3+ years of commercial experience with React/Next.js",
                    "Very good knowledge of TypeScript",
                    "Experience with REST APIs and GraphQL",
                ],
                'what_we_offer': [
                    "Training budget of 5 000 PLN per year",
                    "Modern office in central Warsaw",
                    "Flexible hours and remote work",
                ],
                'tags': ["React", "Next.js", "TypeScript", "CI/CD", "GraphQL"],
                'is_active': True,
                'localization': office,
            },
        )

        questions = [
            RecruitmentQuestion.objects.get_or_create(job_offer=offer, question=text)[0]
            for text in QUESTIONS
        ]

        # Candidate
        candidate_user = self._user('frontendhero', 'candidate@jobonfire.com', 'Candidate123!', User.Roles.CANDIDATE)
        candidate, _ = CandidateProfile.objects.update_or_create(
            user=candidate_user,
            defaults={
                'name': "Anna",
                'last_name': "Nowak",
                'description': "Frontend developer with five years of experience building web applications.",
                'birthday': datetime.date(1994, 8, 14),
                'experience': EXPERIENCE,
                'skills': SKILLS,
                'education': EDUCATION,
                'phone_number': 481112233,
                'place': "Warsaw",
            },
        )
        candidate.profile_links.get_or_create(url="https://github.com/frontendhero", defaults={'name': "GitHub"})

        cv, _ = CandidateCV.objects.update_or_create(
            candidate_profile=candidate,
            name="Frontend CV",
            defaults={
                'is_deleted': False,
                'cv_json': {
                    "fullName": "Anna Nowak",
                    "position": "Frontend Developer",
                    "summary": "Frontend developer who pairs an eye for detail with a love of automation and testing.",
                    "skills": [skill['name'] for skill in SKILLS],
                    "experience": [
                        {
                            "position": item['position'],
                            "company": item['company'],
                            "period": f"{item['start_date']} - {item['end_date']}",
                        }
                        for item in EXPERIENCE
                    ],
                    "education": [
                        {"degree": "Master", "field": "Computer Science",
                         "institution": "Warsaw University of Technology"},
                    ],
                    "contacts": {"email": "candidate@jobonfire.com", "location": "Warsaw"},
                },
            },
        )

        application, created = ApplicationForJobOffer.objects.get_or_create(
            candidate_profile=candidate,
            job_offer=offer,
            defaults={
                'cv': cv,
                'message': "Hi! I have solid experience with Next.js and scalable frontends. "
                           "Happy to tell you more during an interview.",
            },
        )
        if created:
            CandidateAnswer.objects.create(
                application=application,
                question=questions[0],
                answer="I audited the bundle, introduced code splitting and memoized components. "
                       "Load time went down by 40%.",
            )
            Meeting.objects.create(
                application=application,
                date_time=timezone.now() + datetime.timedelta(days=7),
                type=Meeting.Type.ONLINE,
                contributors="Anna Nowak, Piotr Kowalski",
                online_meeting_url="https://meet.jobonfire.com/frontend-interview",
                message="Initial technical interview.",
            )

        self.stdout.write(self.style.SUCCESS(
            f"Seeding finished: employer {employer_user.email}, candidate {candidate_user.email}, "
            f"job offer {offer.id}."
        ))
