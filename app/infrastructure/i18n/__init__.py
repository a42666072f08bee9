"""i18n system - message catalogues and their serialization.

Main components:
- models: MessageCatalogue and TranslatorBag
- loader: TranslationLoader and XliffFileLoader
- dumper: XliffFileDumper
- operations: TargetOperation and merge_catalogues
"""

from infrastructure.i18n.dumper import XliffFileDumper
from infrastructure.i18n.loader import (
    InvalidResourceError,
    TranslationLoader,
    XliffFileLoader,
)
from infrastructure.i18n.models import (
    DEFAULT_DOMAIN,
    INTL_DOMAIN_SUFFIX,
    MessageCatalogue,
    TranslatorBag,
)
from infrastructure.i18n.operations import (
    MergeResult,
    TargetOperation,
    merge_catalogues,
)

__all__ = [
    "DEFAULT_DOMAIN",
    "INTL_DOMAIN_SUFFIX",
    "InvalidResourceError",
    "MergeResult",
    "MessageCatalogue",
    "TargetOperation",
    "TranslationLoader",
    "TranslatorBag",
    "XliffFileDumper",
    "XliffFileLoader",
    "merge_catalogues",
]
