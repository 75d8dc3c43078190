"""Template generator unit tests"""

import json

import pytest

from formforge.enums import FieldType
from formforge.template_generator import (
    CONTACT_FORM,
    DEFAULT_FORM,
    FEEDBACK_SURVEY_FORM,
    JOB_APPLICATION_FORM,
    TemplateGenerator,
)


@pytest.fixture
def generator():
    return TemplateGenerator()


def test_job_application_scenario(generator):
    form = generator.generate("Build a job application form")

    assert form.title == "Job Application Form"
    assert [s.title for s in form.sections] == ["Personal Information", "Work Experience"]
    assert [f.id for f in form.sections[0].fields] == ["name", "email", "phone"]
    assert [f.id for f in form.sections[1].fields] == ["resume", "experience"]
    assert form.sections[1].fields[0].type == FieldType.FILE


def test_feedback_scenario(generator):
    form = generator.generate("general feedback")

    assert form.title == "Customer Feedback Survey"
    rating = next(f for f in form.sections[0].fields if f.id == "rating")
    assert rating.type == FieldType.RADIO
    assert rating.options == ["Excellent", "Good", "Fair", "Poor"]


@pytest.mark.parametrize(
    "prompt,expected",
    [
        ("Job posting", JOB_APPLICATION_FORM),
        ("loan APPLICATION", JOB_APPLICATION_FORM),
        ("Contact us page", CONTACT_FORM),
        ("Yearly SURVEY", FEEDBACK_SURVEY_FORM),
        ("product feedback", FEEDBACK_SURVEY_FORM),
        ("newsletter signup", DEFAULT_FORM),
        ("", DEFAULT_FORM),
    ],
)
def test_keyword_routing(generator, prompt, expected):
    assert generator.generate(prompt).to_dict() == expected


def test_job_keyword_wins_over_contact(generator):
    form = generator.generate("job contact details")
    assert form.title == "Job Application Form"


def test_contact_keyword_wins_over_feedback(generator):
    form = generator.generate("contact form for feedback")
    assert form.sections[0].id == "contact-section"


def test_match_reports_rule_name(generator):
    assert generator.match("a survey")[0] == "feedback_survey"
    assert generator.match("anything else")[0] == "default"


def test_generation_is_deterministic_and_case_insensitive(generator):
    first = json.dumps(generator.generate("Contact").to_dict())
    second = json.dumps(generator.generate("CONTACT").to_dict())
    assert first == second


def test_returned_forms_do_not_share_state(generator):
    form = generator.generate("contact")
    form.sections[0].fields[2].options.append("Other")

    fresh = generator.generate("contact")
    assert fresh.sections[0].fields[2].options == [
        "General Inquiry",
        "Support",
        "Sales",
        "Feedback",
    ]
    assert CONTACT_FORM["sections"][0]["fields"][2]["options"] == [
        "General Inquiry",
        "Support",
        "Sales",
        "Feedback",
    ]


def test_custom_rules_are_checked_in_order():
    generator = TemplateGenerator(
        rules=[("only", lambda p: "x" in p, CONTACT_FORM)],
        default=FEEDBACK_SURVEY_FORM,
    )

    assert generator.generate("x").title == "Contact Form"
    assert generator.generate("job").title == "Customer Feedback Survey"
