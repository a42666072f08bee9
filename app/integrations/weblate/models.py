"""Weblate API resource schemas.

Frozen pydantic models validated from Weblate API payloads. Only the fields
this integration relies on are declared; everything else in the payload is
ignored. Records never carry process state: whether a resource was created by
this process is reported separately through ``Resolved``.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

T = TypeVar("T")


class Component(BaseModel):
    """A Weblate component; one per translation domain.

    Attributes:
        slug: Unique component identifier, equal to the domain name.
        url: API locator of the component itself (used for delete).
        repository_url: API locator for VCS operations (commit).
        translations_url: API locator to list and create translations.
    """

    slug: str
    url: str
    repository_url: str
    translations_url: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class Translation(BaseModel):
    """A locale file of a component.

    Attributes:
        language_code: Locale of the translation (e.g. "de").
        filename: Path of the file inside the component repository; unique
            across the project and used as the unit cache scope.
        file_url: API locator to download and upload the file.
        units_list_url: API locator to list and create units.
    """

    language_code: str
    filename: str
    file_url: str
    units_list_url: str

    model_config = ConfigDict(frozen=True, extra="ignore")


class Unit(BaseModel):
    """A single message inside a translation.

    ``target`` is the first plural form Weblate reports; ``state`` is the raw
    Weblate state code.
    """

    context: str
    url: str
    target: Optional[str] = None
    state: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("target", mode="before")
    @classmethod
    def _first_plural_form(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return v[0] if v else None
        return v


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A resource returned by a get-or-create operation.

    Attributes:
        resource: The component or translation record.
        created: True when this process created the resource on the server.
    """

    resource: T
    created: bool = False
