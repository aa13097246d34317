import logging
from io import BytesIO

from django.template.loader import render_to_string
from xhtml2pdf import pisa

logger = logging.getLogger(__name__)


class PdfRenderError(Exception):
    pass


def _as_list(value):
    if not value:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.splitlines() if line.strip()]
    return list(value)


def cv_context(cv_json):
    """Normalize a generated CV document into template context."""
    data = cv_json or {}
    contacts = data.get('contacts') or {}

    experience = []
    for item in _as_list(data.get('experience')):
        if isinstance(item, str):
            item = {'description': item}
        experience.append({
            'position': item.get('position', ''),
            'company': item.get('company', ''),
            'period': item.get('period', ''),
            'description': _as_list(item.get('description')),
        })

    education = []
    for item in _as_list(data.get('education')):
        if isinstance(item, str):
            item = {'degree': item}
        education.append(item)

    skills = data.get('skills')
    if isinstance(skills, str):
        skills = [s.strip() for s in skills.split(',') if s.strip()]

    return {
        'full_name': data.get('fullName') or data.get('full_name', ''),
        'position': data.get('position', ''),
        'summary': data.get('summary', ''),
        'skills': skills or [],
        'experience': experience,
        'education': education,
        'contacts': contacts,
        'socials': contacts.get('socials') or [],
        'interests': _as_list(data.get('interests')),
    }


def render_cv_pdf(cv):
    """Render a JSON CV to PDF bytes."""
    html = render_to_string('jobs/cv.html', cv_context(cv.cv_json))
    result = BytesIO()
    status = pisa.CreatePDF(html, dest=result, encoding='utf-8')
    if status.err:
        logger.error("xhtml2pdf reported %s errors for CV %s", status.err, cv.id)
        raise PdfRenderError(f"Could not render CV {cv.id}")
    return result.getvalue()
