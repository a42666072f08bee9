"""Tests for infrastructure.i18n.loader module."""

import pytest

from infrastructure.i18n import InvalidResourceError, XliffFileLoader
from tests.factories.weblate import make_xliff


@pytest.fixture
def loader():
    return XliffFileLoader()


@pytest.mark.unit
class TestXliffFileLoader:
    """Tests for XliffFileLoader."""

    def test_loads_xliff_1_2(self, loader):
        """Keys come from resname, messages from target."""
        content = make_xliff({"hello": "Hallo", "bye": "Tschüss"}, locale="de")

        catalogue = loader.load(content, "de", "validators")

        assert catalogue.locale == "de"
        assert catalogue.all() == {"validators": {"hello": "Hallo", "bye": "Tschüss"}}

    def test_falls_back_to_source(self, loader):
        """Without resname the source is the key; without target it is the message."""
        content = (
            '<xliff xmlns="urn:oasis:names:tc:xliff:document:1.2" version="1.2">'
            '<file source-language="en" target-language="de" datatype="plaintext" original="f">'
            "<body>"
            '<trans-unit id="1"><source>Save</source><target>Speichern</target></trans-unit>'
            '<trans-unit id="2" resname="cancel"><source>Cancel</source></trans-unit>'
            "</body></file></xliff>"
        )

        catalogue = loader.load(content, "de")

        assert catalogue.all("messages") == {"Save": "Speichern", "cancel": "Cancel"}

    def test_loads_xliff_2_0(self, loader):
        content = (
            '<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" '
            'srcLang="en" trgLang="fr"><file id="f">'
            '<unit id="1" name="hello"><segment><source>hello</source>'
            "<target>Bonjour</target></segment></unit>"
            '<unit id="2"><segment><source>bye</source></segment></unit>'
            "</file></xliff>"
        )

        catalogue = loader.load(content, "fr")

        assert catalogue.all("messages") == {"hello": "Bonjour", "bye": "bye"}

    def test_keeps_whitespace_and_inline_markup(self, loader):
        content = make_xliff({"greeting": "  Hallo <g id='1'>Welt</g> "})

        catalogue = loader.load(content, "de")

        assert catalogue.get("greeting") == "  Hallo Welt "

    def test_empty_content_gives_empty_catalogue(self, loader):
        catalogue = loader.load("", "de")
        assert catalogue.get_domains() == []

    def test_document_without_units(self, loader):
        catalogue = loader.load(make_xliff({}), "de")
        assert catalogue.all("messages") == {}

    @pytest.mark.parametrize(
        "content", ["<xliff><body>", "not xml at all", "<html></html>"]
    )
    def test_invalid_content_raises(self, loader, content):
        with pytest.raises(InvalidResourceError):
            loader.load(content, "de")
