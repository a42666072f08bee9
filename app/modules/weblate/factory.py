"""Builds ``WeblateProvider`` instances from connection strings.

Usage:
    from modules.weblate.factory import create_provider

    with create_provider() as provider:  # reads WEBLATE_DSN
        provider.write(bag)
"""

from typing import List, Optional, Union

from core.config import Settings
from core.logging import get_module_logger
from infrastructure.i18n import TranslationLoader, XliffFileDumper, XliffFileLoader
from integrations.weblate import (
    ComponentApi,
    Dsn,
    IncompleteDsnError,
    TranslationApi,
    UnitApi,
    UnsupportedSchemeError,
    WeblateClient,
)
from modules.weblate.provider import WeblateProvider

logger = get_module_logger()


class WeblateProviderFactory:
    """Creates providers for ``weblate://`` DSNs.

    One factory can create any number of providers; every provider gets its
    own HTTP session and its own caches.
    """

    def __init__(
        self,
        default_locale: str,
        loader: Optional[TranslationLoader] = None,
        dumper: Optional[XliffFileDumper] = None,
        timeout: int = 30,
    ):
        self.default_locale = default_locale
        self.loader = loader or XliffFileLoader()
        self.dumper = dumper or XliffFileDumper()
        self.timeout = timeout

    def get_supported_schemes(self) -> List[str]:
        return ["weblate"]

    def supports(self, dsn: Union[str, Dsn]) -> bool:
        dsn = _as_dsn(dsn)
        return dsn.scheme in self.get_supported_schemes()

    def create(self, dsn: Union[str, Dsn]) -> WeblateProvider:
        """Create a provider for the server and project named by ``dsn``.

        Raises:
            UnsupportedSchemeError: If the scheme is not ``weblate``
            IncompleteDsnError: If the API token or the project is missing
        """
        dsn = _as_dsn(dsn)
        if dsn.scheme != "weblate":
            raise UnsupportedSchemeError(dsn.scheme, self.get_supported_schemes())

        endpoint = dsn.host
        if dsn.port:
            endpoint += f":{dsn.port}"
        path = (dsn.path or "").strip("/")
        if path:
            endpoint += f"/{path}"

        scheme = "https" if dsn.get_bool_option("https", True) else "http"
        api = f"{scheme}://{endpoint}/api/"

        if not dsn.password:
            raise IncompleteDsnError("Password is not set")
        if not dsn.user:
            raise IncompleteDsnError("User is not set")

        client = WeblateClient(
            api,
            token=dsn.password,
            verify_peer=dsn.get_bool_option("verify_peer", True),
            timeout=self.timeout,
        )

        logger.info(
            "weblate_provider_created",
            endpoint=endpoint,
            project=dsn.user,
            default_locale=self.default_locale,
        )

        return WeblateProvider(
            loader=self.loader,
            dumper=self.dumper,
            default_locale=self.default_locale,
            endpoint=endpoint,
            component_api=ComponentApi(client, dsn.user, self.default_locale),
            translation_api=TranslationApi(client),
            unit_api=UnitApi(client),
        )


def create_provider(settings: Optional[Settings] = None) -> WeblateProvider:
    """Create a provider from the ``WEBLATE_*`` settings.

    Raises:
        IncompleteDsnError: If WEBLATE_DSN is not configured
    """
    if settings is None:
        from core.config import settings

    weblate = settings.weblate
    if not weblate.WEBLATE_DSN:
        raise IncompleteDsnError("WEBLATE_DSN is not set")

    factory = WeblateProviderFactory(
        default_locale=weblate.DEFAULT_LOCALE, timeout=weblate.TIMEOUT
    )
    return factory.create(weblate.WEBLATE_DSN)


def _as_dsn(dsn: Union[str, Dsn]) -> Dsn:
    if isinstance(dsn, Dsn):
        return dsn
    return Dsn.from_string(dsn)
