"""Connection strings for Weblate servers.

Format::

    weblate://<project>:<api-token>@<host>[:<port>][/<path>][?https=0&verify_peer=0]

The user part names the Weblate project, the password part is the API token.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import parse_qsl, unquote, urlsplit

_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Dsn:
    scheme: str
    host: str
    user: Optional[str] = None
    password: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_string(cls, dsn: str) -> "Dsn":
        """Parse a DSN string.

        Raises:
            ValueError: If the string has no scheme or no host
        """
        parts = urlsplit(dsn)
        if not parts.scheme:
            raise ValueError(f'The "{dsn}" DSN must contain a scheme.')
        if not parts.hostname:
            raise ValueError(f'The "{dsn}" DSN must contain a host.')

        return cls(
            scheme=parts.scheme,
            host=parts.hostname,
            user=unquote(parts.username) if parts.username else None,
            password=unquote(parts.password) if parts.password else None,
            port=parts.port,
            path=parts.path or None,
            options=dict(parse_qsl(parts.query, keep_blank_values=True)),
        )

    def get_option(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.options.get(key, default)

    def get_bool_option(self, key: str, default: bool) -> bool:
        value = self.options.get(key)
        if value is None:
            return default
        return value.strip().lower() not in _FALSE_VALUES
