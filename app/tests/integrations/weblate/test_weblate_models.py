import pytest
from pydantic import ValidationError

from integrations.weblate import Component, Resolved, Translation, Unit
from integrations.weblate.utils import preserve_whitespace
from tests.factories.weblate import (
    make_component_data,
    make_translation_data,
    make_unit_data,
)


@pytest.mark.unit
class TestRecords:
    def test_component_ignores_extra_fields(self):
        data = make_component_data("messages")
        data["project"] = {"slug": "website"}

        component = Component.model_validate(data)

        assert component.slug == "messages"
        assert component.translations_url.endswith("/messages/translations/")
        assert not hasattr(component, "project")

    def test_component_reports_missing_fields(self):
        data = make_component_data("messages")
        del data["repository_url"]

        with pytest.raises(ValidationError, match="repository_url"):
            Component.model_validate(data)

    def test_translation_validates_payload(self):
        translation = Translation.model_validate(make_translation_data("fr"))
        assert translation.language_code == "fr"
        assert translation.filename == "messages/fr.xlf"

    def test_translation_rejects_wrong_types(self):
        data = make_translation_data("fr")
        data["language_code"] = 5

        with pytest.raises(ValidationError, match="language_code"):
            Translation.model_validate(data)

    def test_unit_takes_first_plural_form(self):
        data = make_unit_data("apples", target="Apfel")
        data["target"] = ["Apfel", "Äpfel"]

        unit = Unit.model_validate(data)

        assert unit.target == "Apfel"
        assert unit.state == 20

    def test_unit_with_empty_target(self):
        data = make_unit_data("hello", target="")
        data["target"] = []

        unit = Unit.model_validate(data)

        assert unit.target is None
        assert unit.state == 0

    def test_unit_coerces_state(self):
        """Numeric strings become ints; anything else is rejected."""
        unit = Unit.model_validate({"context": "k", "url": "u", "state": "20"})
        assert unit.state == 20

        with pytest.raises(ValidationError, match="state"):
            Unit.model_validate({"context": "k", "url": "u", "state": "done"})

    def test_records_are_immutable(self):
        component = Component.model_validate(make_component_data())
        with pytest.raises(ValidationError):
            component.slug = "other"

    def test_records_compare_by_value(self):
        assert Unit.model_validate(make_unit_data("hello")) == Unit.model_validate(
            make_unit_data("hello")
        )

    def test_resolved_defaults_to_not_created(self):
        component = Component.model_validate(make_component_data())
        assert Resolved(component).created is False


@pytest.mark.unit
def test_preserve_whitespace_marks_every_trans_unit():
    content = '<body><trans-unit id="a"/><trans-unit id="b"/></body>'
    assert preserve_whitespace(content) == (
        '<body><trans-unit xml:space="preserve" id="a"/>'
        '<trans-unit xml:space="preserve" id="b"/></body>'
    )
