"""XLIFF 1.2 serialization of message catalogues."""

import base64
import hashlib
from xml.etree import ElementTree

from infrastructure.i18n.models import DEFAULT_DOMAIN, MessageCatalogue

XLIFF_NAMESPACE = "urn:oasis:names:tc:xliff:document:1.2"


def unit_id(key: str) -> str:
    """Return a short, stable identifier for a message key."""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return base64.b64encode(digest)[:7].decode("ascii").translate(
        str.maketrans("/+", "._")
    )


class XliffFileDumper:
    """Writes the messages of one domain as an XLIFF 1.2 document.

    Every message becomes a ``trans-unit`` whose ``resname`` and source are
    the message key and whose target is the message.
    """

    extension = "xlf"

    def format_catalogue(
        self,
        catalogue: MessageCatalogue,
        domain: str = DEFAULT_DOMAIN,
        default_locale: str = "en",
    ) -> str:
        """Serialize ``domain`` of ``catalogue``, intl messages included.

        Args:
            catalogue: Catalogue to serialize.
            domain: Domain to serialize.
            default_locale: Source language of the document.

        Returns:
            The XLIFF document, with an XML declaration.
        """
        root = ElementTree.Element(
            "xliff", {"xmlns": XLIFF_NAMESPACE, "version": "1.2"}
        )
        file_element = ElementTree.SubElement(
            root,
            "file",
            {
                "source-language": default_locale,
                "target-language": catalogue.locale,
                "datatype": "plaintext",
                "original": f"file.{self.extension}",
            },
        )
        header = ElementTree.SubElement(file_element, "header")
        ElementTree.SubElement(
            header, "tool", {"tool-id": "symfony", "tool-name": "Symfony"}
        )
        body = ElementTree.SubElement(file_element, "body")

        for key, message in catalogue.all(domain).items():
            unit = ElementTree.SubElement(
                body, "trans-unit", {"id": unit_id(key), "resname": key}
            )
            ElementTree.SubElement(unit, "source").text = key
            ElementTree.SubElement(unit, "target").text = message

        ElementTree.indent(root, space="  ")
        document = ElementTree.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="utf-8"?>\n{document}\n'
