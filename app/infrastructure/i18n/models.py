"""Message catalogue models for the i18n system.

A ``MessageCatalogue`` holds every message of one locale, grouped by domain.
Messages written in ICU MessageFormat live in a sibling domain carrying the
``+intl-icu`` suffix (``messages+intl-icu`` next to ``messages``); reading a
plain domain transparently includes its intl sibling.
"""

from typing import Dict, Iterable, List, Optional

INTL_DOMAIN_SUFFIX = "+intl-icu"
DEFAULT_DOMAIN = "messages"


def strip_intl_suffix(domain: str) -> str:
    """Return ``domain`` without its ``+intl-icu`` suffix."""
    if domain.endswith(INTL_DOMAIN_SUFFIX):
        return domain[: -len(INTL_DOMAIN_SUFFIX)]
    return domain


class MessageCatalogue:
    """All messages of a single locale, organized by domain.

    Attributes:
        locale: Locale of every message in the catalogue.
        messages: ``{domain: {id: message}}``; intl domains are stored under
            their suffixed name.
    """

    def __init__(
        self, locale: str, messages: Optional[Dict[str, Dict[str, str]]] = None
    ):
        self.locale = locale
        self.messages: Dict[str, Dict[str, str]] = {}
        for domain, domain_messages in (messages or {}).items():
            self.messages.setdefault(domain, {})
            self.add(domain_messages, domain)

    def __repr__(self) -> str:
        return f"MessageCatalogue(locale={self.locale!r}, domains={self.get_domains()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageCatalogue):
            return NotImplemented
        return self.locale == other.locale and self.messages == other.messages

    def get_domains(self) -> List[str]:
        """Return the domains of the catalogue, intl suffix stripped, in insertion order."""
        domains: List[str] = []
        for domain in self.messages:
            domain = strip_intl_suffix(domain)
            if domain not in domains:
                domains.append(domain)
        return domains

    def all(self, domain: Optional[str] = None):
        """Return the messages of ``domain``, or of every raw domain if omitted.

        For a plain domain the result contains its intl sibling too; a key
        present in both keeps the intl message.
        """
        if domain is None:
            return {name: dict(msgs) for name, msgs in self.messages.items()}

        if domain.endswith(INTL_DOMAIN_SUFFIX):
            return dict(self.messages.get(domain, {}))

        result = dict(self.messages.get(domain + INTL_DOMAIN_SUFFIX, {}))
        for key, message in self.messages.get(domain, {}).items():
            result.setdefault(key, message)
        return result

    def add(self, messages: Dict[str, str], domain: str = DEFAULT_DOMAIN) -> None:
        """Add messages to ``domain``, moving them out of the sibling domain."""
        if domain.endswith(INTL_DOMAIN_SUFFIX):
            alt_domain = strip_intl_suffix(domain)
        else:
            alt_domain = domain + INTL_DOMAIN_SUFFIX

        if not messages:
            return

        target = self.messages.setdefault(domain, {})
        alternate = self.messages.get(alt_domain)
        for key, message in messages.items():
            if alternate is not None:
                alternate.pop(key, None)
            target[key] = message

        if alternate is not None and not alternate:
            del self.messages[alt_domain]

    def set(self, key: str, message: str, domain: str = DEFAULT_DOMAIN) -> None:
        self.add({key: message}, domain)

    def replace(self, messages: Dict[str, str], domain: str = DEFAULT_DOMAIN) -> None:
        """Drop every message of ``domain`` and its intl sibling, then add ``messages``."""
        self.messages.pop(domain, None)
        self.messages.pop(domain + INTL_DOMAIN_SUFFIX, None)
        self.add(messages, domain)

    def defines(self, key: str, domain: str = DEFAULT_DOMAIN) -> bool:
        """Check whether ``key`` is stored in exactly ``domain``."""
        return key in self.messages.get(domain, {})

    def has(self, key: str, domain: str = DEFAULT_DOMAIN) -> bool:
        """Check whether ``key`` exists in ``domain`` or its intl sibling."""
        return self.defines(key, domain) or self.defines(
            key, domain + INTL_DOMAIN_SUFFIX
        )

    def get(self, key: str, domain: str = DEFAULT_DOMAIN) -> str:
        """Return the message for ``key``; the key itself when it is missing."""
        intl = self.messages.get(domain + INTL_DOMAIN_SUFFIX, {})
        if key in intl:
            return intl[key]
        return self.messages.get(domain, {}).get(key, key)

    def add_catalogue(self, other: "MessageCatalogue") -> None:
        """Add every message of ``other`` (same locale) to this catalogue.

        Raises:
            ValueError: If the locales differ
        """
        if other.locale != self.locale:
            raise ValueError(
                f"Cannot add a catalogue for locale {other.locale!r} "
                f"to a catalogue for locale {self.locale!r}"
            )
        for domain, messages in other.messages.items():
            self.add(messages, domain)

    def copy(self) -> "MessageCatalogue":
        return MessageCatalogue(self.locale, self.all())


class TranslatorBag:
    """A set of catalogues, at most one per locale, in insertion order."""

    def __init__(self, catalogues: Optional[Iterable[MessageCatalogue]] = None):
        self._catalogues: Dict[str, MessageCatalogue] = {}
        for catalogue in catalogues or []:
            self.add_catalogue(catalogue)

    def add_catalogue(self, catalogue: MessageCatalogue) -> None:
        """Add a catalogue; messages of an existing catalogue of the same locale win."""
        existing = self._catalogues.get(catalogue.locale)
        if existing is not None:
            catalogue.add_catalogue(existing)
        self._catalogues[catalogue.locale] = catalogue

    def get_catalogue(self, locale: str) -> Optional[MessageCatalogue]:
        return self._catalogues.get(locale)

    def get_catalogues(self) -> List[MessageCatalogue]:
        return list(self._catalogues.values())

    def __len__(self) -> int:
        return len(self._catalogues)
