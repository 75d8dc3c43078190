"""Rule-based form generation used when no language model is available."""

import logging
from typing import Any, Callable

from .schema import Form

logger = logging.getLogger(__name__)

EMAIL_PATTERN = "^[^@]+@[^@]+\\.[^@]+$"
PHONE_PATTERN = "^[+]?[1-9]?[0-9]{7,15}$"

JOB_APPLICATION_FORM: dict[str, Any] = {
    "title": "Job Application Form",
    "description": "Apply for a position with our company",
    "sections": [
        {
            "id": "personal-info",
            "title": "Personal Information",
            "description": "Please provide your basic information",
            "fields": [
                {
                    "id": "name",
                    "type": "text",
                    "label": "Full Name",
                    "placeholder": "Enter your full name",
                    "required": True,
                    "options": [],
                    "validation": {"minLength": 2, "maxLength": 100},
                    "description": "Your legal full name",
                },
                {
                    "id": "email",
                    "type": "email",
                    "label": "Email Address",
                    "placeholder": "your.email@example.com",
                    "required": True,
                    "options": [],
                    "validation": {"pattern": EMAIL_PATTERN},
                    "description": "A valid email address",
                },
                {
                    "id": "phone",
                    "type": "tel",
                    "label": "Phone Number",
                    "placeholder": "+1 (555) 123-4567",
                    "required": True,
                    "options": [],
                    "validation": {"pattern": PHONE_PATTERN},
                    "description": "Your contact phone number",
                },
            ],
        },
        {
            "id": "experience",
            "title": "Work Experience",
            "description": "Tell us about your professional background",
            "fields": [
                {
                    "id": "resume",
                    "type": "file",
                    "label": "Upload Resume",
                    "placeholder": "",
                    "required": True,
                    "options": [],
                    "validation": {},
                    "description": "Upload your resume (PDF, DOC, or DOCX)",
                },
                {
                    "id": "experience",
                    "type": "textarea",
                    "label": "Work Experience",
                    "placeholder": "Describe your relevant work experience...",
                    "required": True,
                    "options": [],
                    "validation": {"minLength": 50, "maxLength": 1000},
                    "description": "Briefly describe your work experience",
                },
            ],
        },
    ],
}

CONTACT_FORM: dict[str, Any] = {
    "title": "Contact Form",
    "description": "Get in touch with us",
    "sections": [
        {
            "id": "contact-section",
            "title": "Contact Information",
            "description": "How can we help you?",
            "fields": [
                {
                    "id": "name",
                    "type": "text",
                    "label": "Full Name",
                    "placeholder": "Enter your full name",
                    "required": True,
                    "options": [],
                    "validation": {"minLength": 2, "maxLength": 50},
                    "description": "Your first and last name",
                },
                {
                    "id": "email",
                    "type": "email",
                    "label": "Email Address",
                    "placeholder": "Enter your email",
                    "required": True,
                    "options": [],
                    "validation": {"pattern": EMAIL_PATTERN},
                    "description": "A valid email address",
                },
                {
                    "id": "subject",
                    "type": "select",
                    "label": "Subject",
                    "placeholder": "Select a subject",
                    "required": True,
                    "options": ["General Inquiry", "Support", "Sales", "Feedback"],
                    "validation": {},
                    "description": "What is this about?",
                },
                {
                    "id": "message",
                    "type": "textarea",
                    "label": "Message",
                    "placeholder": "Enter your message",
                    "required": True,
                    "options": [],
                    "validation": {"minLength": 10, "maxLength": 500},
                    "description": "Your message or inquiry",
                },
            ],
        }
    ],
}

FEEDBACK_SURVEY_FORM: dict[str, Any] = {
    "title": "Customer Feedback Survey",
    "description": "Help us improve our service",
    "sections": [
        {
            "id": "feedback-section",
            "title": "Your Feedback",
            "description": "We value your opinion",
            "fields": [
                {
                    "id": "name",
                    "type": "text",
                    "label": "Name (Optional)",
                    "placeholder": "Your name",
                    "required": False,
                    "options": [],
                    "validation": {"maxLength": 50},
                    "description": "Optional: Tell us your name",
                },
                {
                    "id": "rating",
                    "type": "radio",
                    "label": "Overall Rating",
                    "placeholder": "",
                    "required": True,
                    "options": ["Excellent", "Good", "Fair", "Poor"],
                    "validation": {},
                    "description": "How would you rate our service?",
                },
                {
                    "id": "feedback",
                    "type": "textarea",
                    "label": "Additional Comments",
                    "placeholder": "Tell us more about your experience...",
                    "required": False,
                    "options": [],
                    "validation": {"maxLength": 1000},
                    "description": "Any additional feedback you'd like to share",
                },
            ],
        }
    ],
}

DEFAULT_FORM: dict[str, Any] = {
    "title": "Contact Form",
    "description": "Please fill out this form",
    "sections": [
        {
            "id": "default-section",
            "title": "Information",
            "description": "Please provide your details",
            "fields": [
                {
                    "id": "name",
                    "type": "text",
                    "label": "Name",
                    "placeholder": "Enter your name",
                    "required": True,
                    "options": [],
                    "validation": {"minLength": 2, "maxLength": 50},
                    "description": "Your name",
                },
                {
                    "id": "email",
                    "type": "email",
                    "label": "Email",
                    "placeholder": "Enter your email",
                    "required": True,
                    "options": [],
                    "validation": {"pattern": EMAIL_PATTERN},
                    "description": "Your email address",
                },
            ],
        }
    ],
}


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Build a predicate matching prompts that contain any keyword (case-insensitive)."""
    lowered = tuple(k.lower() for k in keywords)

    def predicate(prompt: str) -> bool:
        text = prompt.lower()
        return any(k in text for k in lowered)

    return predicate


# Checked in order; the first matching rule wins.
TEMPLATE_RULES: list[tuple[str, Callable[[str], bool], dict[str, Any]]] = [
    ("job_application", contains_any("job", "application"), JOB_APPLICATION_FORM),
    ("contact", contains_any("contact"), CONTACT_FORM),
    ("feedback_survey", contains_any("survey", "feedback"), FEEDBACK_SURVEY_FORM),
]


class TemplateGenerator:
    """Map a free-text prompt to one of the canned form templates."""

    def __init__(self, rules=None, default: dict[str, Any] | None = None):
        self.rules = TEMPLATE_RULES if rules is None else rules
        self.default = DEFAULT_FORM if default is None else default

    def match(self, prompt: str) -> tuple[str, dict[str, Any]]:
        """Return the name and template of the first rule matching the prompt."""
        for name, predicate, template in self.rules:
            if predicate(prompt):
                return name, template
        return "default", self.default

    def generate(self, prompt: str) -> Form:
        name, template = self.match(prompt)
        logger.debug(f"Template generator selected '{name}' template")
        # Validating builds a fresh Form, so the module-level templates are never shared.
        return Form.from_dict(template)
