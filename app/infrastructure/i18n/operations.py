"""Catalogue comparison and merging.

``TargetOperation`` compares a *source* catalogue with a *target* catalogue of
the same locale and sorts each message into one of three batches:

- ``new``: in the target only
- ``obsolete``: in the source only
- ``all``: every message kept by the operation; source messages also found
  in the target, plus the new ones

``merge_catalogues`` applies it to a locally authored catalogue (source) and
the copy just downloaded from the translation server (target). The merged
catalogue keeps every local message and gains the server-only ones. Local
values win for keys present on both sides.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from core.logging import get_module_logger
from infrastructure.i18n.models import (
    INTL_DOMAIN_SUFFIX,
    MessageCatalogue,
)

logger = get_module_logger()

ALL_BATCH = "all"
NEW_BATCH = "new"
OBSOLETE_BATCH = "obsolete"


class TargetOperation:
    """Sorts the messages of two catalogues of the same locale into batches.

    Domains are processed lazily, on first access to one of their batches.

    Raises:
        ValueError: If the two catalogues have different locales
    """

    def __init__(self, source: MessageCatalogue, target: MessageCatalogue):
        if source.locale != target.locale:
            raise ValueError(
                "Operated catalogues must belong to the same locale "
                f"({source.locale!r} != {target.locale!r})."
            )

        self.source = source
        self.target = target
        self._result = MessageCatalogue(source.locale)
        self._batches: Dict[str, Dict[str, Dict[str, str]]] = {}

    def get_domains(self) -> List[str]:
        domains = self.source.get_domains()
        for domain in self.target.get_domains():
            if domain not in domains:
                domains.append(domain)
        return domains

    def get_messages(self, domain: str) -> Dict[str, str]:
        return dict(self._batch(domain)[ALL_BATCH])

    def get_new_messages(self, domain: str) -> Dict[str, str]:
        return dict(self._batch(domain)[NEW_BATCH])

    def get_obsolete_messages(self, domain: str) -> Dict[str, str]:
        return dict(self._batch(domain)[OBSOLETE_BATCH])

    def get_result(self) -> MessageCatalogue:
        for domain in self.get_domains():
            self._batch(domain)
        return self._result

    def move_messages_to_intl_domains_if_possible(self, batch: str = ALL_BATCH) -> None:
        """Move a batch of the result into the ``+intl-icu`` sibling domains.

        A domain is moved when the source already uses its intl sibling, or
        when the source has no message for it at all.

        Raises:
            ValueError: If ``batch`` is not one of all, new or obsolete
        """
        getters = {
            ALL_BATCH: self.get_messages,
            NEW_BATCH: self.get_new_messages,
            OBSOLETE_BATCH: self.get_obsolete_messages,
        }
        if batch not in getters:
            raise ValueError(f'Wrong batch name "{batch}".')

        result = self.get_result()
        for domain in self.get_domains():
            intl_domain = domain + INTL_DOMAIN_SUFFIX
            messages = getters[batch](domain)

            if not messages or (
                not self.source.all(intl_domain) and self.source.all(domain)
            ):
                continue

            intl_messages = result.all(intl_domain)
            for key, message in messages.items():
                intl_messages.setdefault(key, message)
            result.add(intl_messages, intl_domain)

            logger.debug(
                "moved_messages_to_intl_domain",
                domain=domain,
                batch=batch,
                count=len(messages),
            )

    def _batch(self, domain: str) -> Dict[str, Dict[str, str]]:
        if domain not in self._batches:
            self._process_domain(domain)
        return self._batches[domain]

    def _process_domain(self, domain: str) -> None:
        batch: Dict[str, Dict[str, str]] = {
            ALL_BATCH: {},
            NEW_BATCH: {},
            OBSOLETE_BATCH: {},
        }
        intl_domain = domain + INTL_DOMAIN_SUFFIX

        for key, message in self.source.all(domain).items():
            if self.target.has(key, domain):
                batch[ALL_BATCH][key] = message
                stored = intl_domain if self.source.defines(key, intl_domain) else domain
                self._result.add({key: message}, stored)
            else:
                batch[OBSOLETE_BATCH][key] = message

        for key, message in self.target.all(domain).items():
            if not self.source.has(key, domain):
                batch[ALL_BATCH][key] = message
                batch[NEW_BATCH][key] = message
                stored = intl_domain if self.target.defines(key, intl_domain) else domain
                self._result.add({key: message}, stored)

        self._batches[domain] = batch


@dataclass
class MergeResult:
    """Outcome of merging a local catalogue with its server copy.

    Attributes:
        domain: The merged domain.
        new_messages: Server-only messages, missing from the local catalogue.
        intl_keys: Keys of new_messages that belong to the intl sibling domain.
        catalogue: Copy of the local catalogue with ``new_messages`` added.
    """

    domain: str
    new_messages: Dict[str, str] = field(default_factory=dict)
    intl_keys: Set[str] = field(default_factory=set)
    catalogue: Optional[MessageCatalogue] = None

    @property
    def has_changes(self) -> bool:
        return bool(self.new_messages)

    def apply_to(self, catalogue: MessageCatalogue) -> None:
        """Add the new messages to ``catalogue``, ICU ones to the intl domain."""
        intl_domain = self.domain + INTL_DOMAIN_SUFFIX
        for key, message in self.new_messages.items():
            target = intl_domain if key in self.intl_keys else self.domain
            catalogue.set(key, message, target)


def merge_catalogues(
    local: MessageCatalogue, remote: MessageCatalogue, domain: str
) -> MergeResult:
    """Merge the server copy of ``domain`` into a copy of the local catalogue.

    Neither input is modified. Messages that only exist on the server are
    added to the copy; messages present on both sides keep their local value.

    Args:
        local: Locally authored catalogue.
        remote: Catalogue loaded from the server file of the same locale.
        domain: Domain to merge.

    Returns:
        MergeResult with the server-only messages and the merged catalogue.
    """
    operation = TargetOperation(local, remote)
    operation.move_messages_to_intl_domains_if_possible(NEW_BATCH)
    new_messages = operation.get_new_messages(domain)
    intl_domain = domain + INTL_DOMAIN_SUFFIX
    result = operation.get_result()

    merge = MergeResult(
        domain=domain,
        new_messages=new_messages,
        intl_keys={key for key in new_messages if result.defines(key, intl_domain)},
    )
    merge.catalogue = local.copy()
    merge.apply_to(merge.catalogue)

    logger.debug(
        "catalogues_merged",
        locale=local.locale,
        domain=domain,
        new_messages=len(new_messages),
    )

    return merge
