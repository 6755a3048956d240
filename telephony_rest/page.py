"""
Page module for deserializing one batch of a paginated collection response
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar, Union

from .error_mapper import RecordDecodeError


T = TypeVar('T')

Decoder = Callable[[Dict[str, Any]], T]


def _locator(data: Dict[str, Any], name: str) -> Optional[str]:
    """Read a page locator, accepting both the *_uri and *_url spellings"""
    for key in (f"{name}_uri", f"{name}_url"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _index(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class PageMeta:
    """Server-supplied pagination metadata; every field may be absent"""
    page_size: Optional[int] = None
    page: Optional[int] = None
    start: Optional[int] = None
    end: Optional[int] = None
    uri: Optional[str] = None
    first_page_uri: Optional[str] = None
    previous_page_uri: Optional[str] = None
    next_page_uri: Optional[str] = None
    key: Optional[str] = None

    @classmethod
    def from_json(cls, body: Dict[str, Any]) -> "PageMeta":
        """
        Build the metadata from a collection response body

        The nested "meta" object is used when present; otherwise the legacy
        top-level fields (page, page_size, start, end, uri, next_page_uri, ...)
        are read.
        """
        meta = body.get('meta')
        data = meta if isinstance(meta, dict) else body

        key = data.get('key')
        return cls(
            page_size=_index(data, 'page_size'),
            page=_index(data, 'page'),
            start=_index(data, 'start'),
            end=_index(data, 'end'),
            uri=data.get('uri') or data.get('url') or None,
            first_page_uri=_locator(data, 'first_page'),
            previous_page_uri=_locator(data, 'previous_page'),
            next_page_uri=_locator(data, 'next_page'),
            key=key if isinstance(key, str) else None
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """A single fetched batch of records plus its pagination metadata"""
    records: Tuple[T, ...]
    meta: PageMeta

    @property
    def next_page_uri(self) -> Optional[str]:
        return self.meta.next_page_uri

    @property
    def previous_page_uri(self) -> Optional[str]:
        return self.meta.previous_page_uri

    @property
    def first_page_uri(self) -> Optional[str]:
        return self.meta.first_page_uri

    @property
    def uri(self) -> Optional[str]:
        return self.meta.uri

    @property
    def page_size(self) -> Optional[int]:
        return self.meta.page_size

    @property
    def page_number(self) -> Optional[int]:
        return self.meta.page

    @property
    def start(self) -> Optional[int]:
        return self.meta.start

    @property
    def end(self) -> Optional[int]:
        return self.meta.end

    @property
    def is_terminal(self) -> bool:
        return self.meta.next_page_uri is None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @classmethod
    def deserialize(cls, records_key: str, content: Union[bytes, str],
                    decoder: Decoder) -> "Page[T]":
        """
        Build a Page from a raw JSON collection body

        Args:
            records_key: Name of the field holding the records array
            content: Raw JSON body
            decoder: Per-resource decoder turning one JSON object into a record

        Returns:
            Page with records in server order

        Raises:
            RecordDecodeError: If the body or the records array has an unexpected shape
        """
        try:
            body = json.loads(content)
        except (ValueError, UnicodeDecodeError) as e:
            raise RecordDecodeError(f"Collection body is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise RecordDecodeError(
                f"Collection body must be a JSON object, got {type(body).__name__}"
            )

        meta = PageMeta.from_json(body)

        items = body.get(records_key)
        if items is None and meta.key:
            items = body.get(meta.key)
        if items is None:
            raise RecordDecodeError(f"Collection body has no '{records_key}' field")
        if not isinstance(items, list):
            raise RecordDecodeError(f"Field '{records_key}' must be an array")

        records = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise RecordDecodeError(
                    f"Element {position} of '{records_key}' must be an object"
                )
            records.append(decoder(item))

        return cls(records=tuple(records), meta=meta)
