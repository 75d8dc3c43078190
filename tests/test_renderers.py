"""Renderer and export unit tests"""

import io
import json
import zipfile

import pytest

from formforge.enums import FieldType
from formforge.renderers import (
    FormRenderer,
    export_bundle,
    export_filename,
    export_json,
    input_type,
    shared_field_ids,
    widget_for,
)
from formforge.schema import Form, FormField
from formforge.template_generator import TemplateGenerator


@pytest.fixture
def renderer():
    return FormRenderer()


@pytest.fixture
def job_form():
    return TemplateGenerator().generate("job application")


def make_field(type_, options=None):
    return FormField(id="f", type=type_, label="F", options=options)


class TestWidgetMapping:
    @pytest.mark.parametrize(
        "type_, expected",
        [
            (FieldType.TEXT, "input"),
            (FieldType.EMAIL, "input"),
            (FieldType.DATE, "input"),
            (FieldType.FILE, "input"),
            (FieldType.TEXTAREA, "textarea"),
            (FieldType.SELECT, "select"),
            (FieldType.RADIO, "radio"),
        ],
    )
    def test_widget_for(self, type_, expected):
        assert widget_for(make_field(type_)) == expected

    def test_checkbox_widget_depends_on_options(self):
        assert widget_for(make_field(FieldType.CHECKBOX)) == "checkbox"
        assert widget_for(make_field(FieldType.CHECKBOX, ["Yes"])) == "checkbox"
        assert widget_for(make_field(FieldType.CHECKBOX, ["A", "B"])) == "checkbox_group"

    def test_input_type(self):
        assert input_type(make_field(FieldType.TEL)) == "tel"
        assert input_type(make_field(FieldType.PASSWORD)) == "password"
        assert input_type(make_field(FieldType.SELECT)) == "text"


class TestExportHtml:
    def test_inputs_and_labels(self, renderer, job_form):
        html = renderer.export_html(job_form)

        assert html.lstrip().startswith("<!DOCTYPE html>")
        assert "<title>Job Application Form</title>" in html
        assert (
            '<input type="email" id="personal-info-email" name="email" '
            'placeholder="your.email@example.com" required>'
        ) in html
        assert '<input type="file" id="experience-resume" name="resume" required>' in html
        assert '<label for="personal-info-email">Email Address *</label>' in html
        assert "<small>A valid email address</small>" in html

    def test_one_fieldset_per_section(self, renderer, job_form):
        html = renderer.export_html(job_form)

        assert html.count("<fieldset>") == 2
        assert "<legend>Personal Information</legend>" in html
        assert "<p>Tell us about your professional background</p>" in html
        assert '<button type="submit">Submit</button>' in html

    def test_select_options_are_slugified(self, renderer):
        form = TemplateGenerator().generate("contact us")

        html = renderer.export_html(form)

        assert '<option value="">Select a subject</option>' in html
        assert '<option value="general-inquiry">General Inquiry</option>' in html

    def test_select_placeholder_defaults_to_label(self, renderer, sample_form):
        html = renderer.export_html(sample_form)
        assert '<option value="">Select track</option>' in html
        assert '<option value="data-science">Data Science</option>' in html

    def test_radio_group(self, renderer):
        form = TemplateGenerator().generate("feedback survey")

        html = renderer.export_html(form)

        assert (
            '<input type="radio" id="feedback-section-rating-0" name="rating" '
            'value="excellent"> Excellent'
        ) in html
        assert 'id="feedback-section-rating-3"' in html
        assert "<label>Overall Rating *</label>" in html

    def test_single_checkbox_label(self, renderer, sample_form):
        html = renderer.export_html(sample_form)
        assert '<input type="checkbox" id="extras-terms" name="terms"> I agree' in html

    def test_checkbox_group(self, renderer):
        form = Form.from_dict(
            {
                "title": "Toppings",
                "sections": [
                    {
                        "id": "s",
                        "title": "Pick",
                        "fields": [
                            {
                                "id": "extra",
                                "type": "checkbox",
                                "label": "Extras",
                                "options": ["Extra Cheese", "Olives"],
                            }
                        ],
                    }
                ],
            }
        )

        html = renderer.export_html(form)

        assert 'name="extra[]" value="extra-cheese"> Extra Cheese' in html
        assert 'id="s-extra-1"' in html
        assert "<label>Extras</label>" in html

    def test_text_is_escaped(self, renderer):
        form = Form.from_dict(
            {
                "title": "<b>Bold</b> & co",
                "sections": [
                    {
                        "id": "s",
                        "title": "S",
                        "fields": [{"id": "x", "type": "text", "label": "<script>x</script>"}],
                    }
                ],
            }
        )

        html = renderer.export_html(form)

        assert "&lt;b&gt;Bold&lt;/b&gt; &amp; co" in html
        assert "<script" not in html

    def test_no_external_references(self, renderer, job_form):
        html = renderer.export_html(job_form)

        assert "<style>" in html
        assert "<link" not in html
        assert "<script" not in html
        assert "src=" not in html
        assert "http://" not in html and "https://" not in html


    def test_field_id_shared_across_sections(self, renderer):
        form = Form.from_dict(
            {
                "title": "Two Guests",
                "sections": [
                    {
                        "id": "host",
                        "title": "Host",
                        "fields": [{"id": "name", "type": "text", "label": "Name"}],
                    },
                    {
                        "id": "guest",
                        "title": "Guest",
                        "fields": [
                            {"id": "name", "type": "text", "label": "Name"},
                            {"id": "meal", "type": "radio", "label": "Meal", "options": ["Fish"]},
                        ],
                    },
                ],
            }
        )

        html = renderer.export_html(form)

        assert '<input type="text" id="host-name" name="host-name">' in html
        assert '<input type="text" id="guest-name" name="guest-name">' in html
        assert 'id="guest-meal-0" name="meal"' in html
        assert html.count('id="host-name"') == 1


class TestPreview:
    def test_submit_is_inert(self, renderer, sample_form):
        html = renderer.render_preview(sample_form)

        assert '<form onsubmit="return false;" novalidate>' in html
        assert '<button type="submit">Submit Form</button>' in html

    def test_control_ids_are_positional(self, renderer, sample_form):
        html = renderer.render_preview(sample_form)

        assert '<label for="0-0">Name *</label>' in html
        assert '<input type="text" id="0-0" name="name" required>' in html
        assert '<select id="0-1" name="track">' in html
        assert "<p>Optional add-ons</p>" in html


class TestEditor:
    def test_lists_settings_and_type_choices(self, renderer, sample_form):
        html = renderer.render_editor(sample_form)

        assert "Form Settings" in html
        assert 'value="Event Registration"' in html
        assert '<option value="file">File Upload</option>' in html
        assert '<option value="tel">Phone</option>' in html
        assert '<option value="select" selected>' in html
        assert "Data Science\nWeb" in html

    def test_remove_section_disabled_for_last_section(self, renderer):
        form = TemplateGenerator().generate("contact")

        html = renderer.render_editor(form)

        assert 'data-action="remove_section" data-section-index="0" disabled' in html

    def test_remove_section_enabled_with_several(self, renderer, sample_form):
        html = renderer.render_editor(sample_form)
        assert " disabled" not in html


class TestExportJson:
    def test_two_space_indent(self, sample_form):
        text = export_json(sample_form)

        assert text.startswith('{\n  "title": "Event Registration"')
        assert "null" not in text

    def test_reexport_is_fixed_point(self, job_form):
        text = export_json(job_form)
        assert export_json(Form.from_dict(json.loads(text))) == text

    def test_validation_uses_wire_keys(self, job_form):
        data = json.loads(export_json(job_form))
        assert data["sections"][0]["fields"][0]["validation"] == {
            "minLength": 2,
            "maxLength": 100,
        }


class TestFilenamesAndBundle:
    def test_export_filename(self, job_form):
        assert export_filename(job_form, "json") == "job-application-form.json"
        assert export_filename(job_form, "html") == "job-application-form.html"

    def test_bundle_contains_both_exports(self, renderer, job_form):
        data = export_bundle(job_form, renderer)

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert sorted(archive.namelist()) == [
                "job-application-form.html",
                "job-application-form.json",
            ]
            assert archive.read("job-application-form.json").decode() == export_json(job_form)
            assert "<fieldset>" in archive.read("job-application-form.html").decode()


def test_shared_field_ids():
    form = Form.from_dict(
        {
            "title": "T",
            "sections": [
                {"id": "a", "title": "A", "fields": [{"id": "x", "type": "text", "label": "X"}]},
                {
                    "id": "b",
                    "title": "B",
                    "fields": [
                        {"id": "x", "type": "text", "label": "X"},
                        {"id": "y", "type": "text", "label": "Y"},
                    ],
                },
            ],
        }
    )

    assert shared_field_ids(form) == {"x"}
