from datetime import datetime
from typing import Optional

from bookshelf.domain.shared.time import utc_now


class Publisher:
    """Book publisher. The integer id is assigned by the store on first save."""

    def __init__(
        self,
        name: str,
        country: str,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id
        self._name = name
        self._country = country
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def country(self) -> str:
        return self._country

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update(self, name: Optional[str] = None, country: Optional[str] = None) -> None:
        if name is not None:
            self._name = name
        if country is not None:
            self._country = country
        self._updated_at = utc_now()

    def __repr__(self) -> str:
        return f"Publisher(id={self._id}, name={self._name!r})"
