"""
ResourceSet module providing lazy auto-paging iteration over a collection
"""

import logging
from typing import TYPE_CHECKING, Generic, Iterator, TypeVar

from .error_mapper import ResourceSetBrokenError
from .page import Page

if TYPE_CHECKING:
    from .http_client import HTTPClient
    from .reader import Reader


T = TypeVar('T')

logger = logging.getLogger(__name__)


class ResourceSet(Generic[T]):
    """
    Lazy sequence of records spanning every page of a collection query

    Only the current page is held. The next page is requested when the
    consumer moves past the last record of the current one, and never once a
    page without a "next" locator has been reached. A ResourceSet cannot be
    rewound and must not be shared between threads.
    """

    def __init__(self, reader: "Reader[T]", client: "HTTPClient", page: Page[T]):
        self.reader = reader
        self.client = client
        self._page = page
        self._cursor = 0
        self._page_count = 1
        self._exhausted = False
        self._broken = False

    @property
    def current_page(self) -> Page[T]:
        return self._page

    @property
    def page_count(self) -> int:
        """Number of pages fetched so far, including the first"""
        return self._page_count

    @property
    def is_exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._broken:
            raise ResourceSetBrokenError(
                f"{self.reader.descriptor.name} ResourceSet failed while paging and cannot be advanced"
            )

        while True:
            if self._cursor < len(self._page.records):
                record = self._page.records[self._cursor]
                self._cursor += 1
                return record

            if self._exhausted or self._page.next_page_uri is None:
                self._exhausted = True
                raise StopIteration

            self._advance_page()

    def _advance_page(self) -> None:
        next_page_uri = self._page.next_page_uri
        logger.debug(f"Fetching next {self.reader.descriptor.name} page: {next_page_uri}")

        try:
            page = self.reader.fetch_page(next_page_uri, self.client)
        except Exception:
            self._broken = True
            raise

        self._page = page
        self._cursor = 0
        self._page_count += 1
