"""Translation loading interface and implementations.

Defines the contract for turning serialized translation files into
``MessageCatalogue`` objects and provides the XLIFF loader used for files
exchanged with Weblate.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional, Tuple
from xml.etree import ElementTree

from core.logging import get_module_logger
from infrastructure.i18n.models import DEFAULT_DOMAIN, MessageCatalogue

logger = get_module_logger()


class InvalidResourceError(ValueError):
    """Raised when translation content cannot be parsed."""


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to parse serialized translations of one
    domain for one locale.
    """

    @abstractmethod
    def load(
        self, content: str, locale: str, domain: str = DEFAULT_DOMAIN
    ) -> MessageCatalogue:
        """Load translations from serialized content.

        Args:
            content: Serialized translation file.
            locale: Locale of the messages.
            domain: Domain the messages are stored in.

        Returns:
            MessageCatalogue with the loaded messages.

        Raises:
            InvalidResourceError: If the content cannot be parsed.
        """
        pass


class XliffFileLoader(TranslationLoader):
    """Loader for XLIFF 1.2 and 2.0 documents.

    The message key is the ``resname`` attribute (``name`` in 2.0), or the
    source text when it is absent. The message is the target text, or the
    source text for units without a target.
    """

    def load(
        self, content: str, locale: str, domain: str = DEFAULT_DOMAIN
    ) -> MessageCatalogue:
        catalogue = MessageCatalogue(locale)
        if not content or not content.strip():
            return catalogue

        try:
            root = ElementTree.fromstring(content.encode("utf-8"))
        except ElementTree.ParseError as e:
            logger.warning("xliff_parse_failed", locale=locale, domain=domain, error=str(e))
            raise InvalidResourceError(f"Unable to parse XLIFF content: {e}") from e

        if _local_name(root.tag) != "xliff":
            raise InvalidResourceError(
                f'Expected an "xliff" root element, got "{_local_name(root.tag)}".'
            )

        if root.get("version", "1.2").startswith("2"):
            messages = dict(self._extract_v2(root))
        else:
            messages = dict(self._extract_v1(root))

        catalogue.add(messages, domain)
        logger.debug(
            "xliff_loaded",
            locale=locale,
            domain=domain,
            message_count=len(messages),
        )
        return catalogue

    def _extract_v1(self, root: ElementTree.Element) -> Iterator[Tuple[str, str]]:
        for unit in _iter_local(root, "trans-unit"):
            source = _text(_find_local(unit, "source"))
            key = unit.get("resname") or source
            if not key:
                continue

            target = _find_local(unit, "target")
            yield key, _text(target) if target is not None else source

    def _extract_v2(self, root: ElementTree.Element) -> Iterator[Tuple[str, str]]:
        for unit in _iter_local(root, "unit"):
            for segment in _iter_local(unit, "segment"):
                source = _text(_find_local(segment, "source"))
                key = unit.get("name") or source
                if not key:
                    continue

                target = _find_local(segment, "target")
                yield key, _text(target) if target is not None else source


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _iter_local(element: ElementTree.Element, name: str) -> Iterator[ElementTree.Element]:
    for child in element.iter():
        if _local_name(child.tag) == name:
            yield child


def _find_local(
    element: ElementTree.Element, name: str
) -> Optional[ElementTree.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(element: Optional[ElementTree.Element]) -> str:
    """Return the full text of an element, inline markup included."""
    if element is None:
        return ""
    return "".join(element.itertext())

