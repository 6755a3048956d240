"""
Reader module for building collection queries and fetching their pages
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from .config_loader import DEFAULT_PAGE_SIZE
from .descriptor import ResourceDescriptor
from .error_mapper import validate_response
from .http_client import HTTPClient, HttpMethod, Request
from .page import Page
from .resource_set import ResourceSet


T = TypeVar('T')

logger = logging.getLogger(__name__)


class Reader(Generic[T]):
    """
    Generic reader for any collection endpoint described by a ResourceDescriptor

    Filters are set fluently and only the ones that are set are sent. Iteration
    state lives in the ResourceSet returned by read(); the reader itself only
    builds requests and turns responses into pages.
    """

    def __init__(self, descriptor: ResourceDescriptor, **path_params: Any):
        if descriptor.records_key is None:
            raise ValueError(f"{descriptor.name} is not a readable collection")

        self.descriptor = descriptor
        self.path = descriptor.render(descriptor.list_path, path_params)
        self._filters: Dict[str, Any] = {}
        self._page_size: Optional[int] = None

    def by(self, **filters: Any) -> "Reader[T]":
        """
        Set query filters by name

        Setting a filter again replaces its value and None clears it. A list or
        tuple value sends the parameter once per element.

        Raises:
            ValueError: If a filter is not supported by the resource
        """
        unknown = [name for name in filters if name not in self.descriptor.filters]
        if unknown:
            raise ValueError(
                f"Unsupported filters for {self.descriptor.name}: {', '.join(sorted(unknown))}"
            )

        for name, value in filters.items():
            if value is None:
                self._filters.pop(name, None)
            else:
                self._filters[name] = value
        return self

    def page_size(self, page_size: int) -> "Reader[T]":
        if page_size < 1:
            raise ValueError(f"Page size must be a positive integer, got {page_size}")
        self._page_size = page_size
        return self

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    def get_page_size(self, client: Optional[HTTPClient] = None) -> int:
        if self._page_size is not None:
            return self._page_size
        if client is not None:
            return client.config.page_size
        return DEFAULT_PAGE_SIZE

    def query_params(self, client: Optional[HTTPClient] = None) -> List[Tuple[str, Any]]:
        """Wire query parameters for the first page, in filter declaration order"""
        params = []
        for name, wire_name in self.descriptor.filters.items():
            if name not in self._filters:
                continue
            value = self._filters[name]
            if isinstance(value, (list, tuple)):
                params.extend((wire_name, item) for item in value)
            else:
                params.append((wire_name, value))

        params.append(("PageSize", self.get_page_size(client)))
        return params

    def build_request(self, client: HTTPClient) -> Request:
        request = Request.for_domain(
            HttpMethod.GET,
            self.descriptor.domain,
            self.path,
            client.account_sid
        )
        for key, value in self.query_params(client):
            request.add_query_param(key, value)
        return request

    def read(self, client: HTTPClient) -> ResourceSet[T]:
        """
        Fetch the first page and wrap it in a lazily paging ResourceSet

        Raises:
            ApiConnectionError: If the server could not be reached
            ApiError: If the server answered with a failing status
            RecordDecodeError: If the page body had an unexpected shape
        """
        page = self.first_page(client)
        return ResourceSet(self, client, page)

    def first_page(self, client: HTTPClient) -> Page[T]:
        return self.page_for_request(client, self.build_request(client))

    def fetch_page(self, next_page_uri: str, client: HTTPClient) -> Page[T]:
        """
        Fetch the page a previous page's "next" locator points at

        The locator already encodes the full query, so no filters are added.
        """
        request = Request.for_url(
            HttpMethod.GET,
            next_page_uri,
            client.account_sid,
            domain=self.descriptor.domain
        )
        return self.page_for_request(client, request)

    def page_for_request(self, client: HTTPClient, request: Request) -> Page[T]:
        response = client.request(request)

        response = validate_response(
            response,
            self.descriptor.expected_status('read'),
            self.descriptor.failure_message('read')
        )

        page = Page.deserialize(self.descriptor.records_key, response.content, self.descriptor.decoder)
        logger.debug(
            f"Fetched {self.descriptor.name} page {page.page_number} "
            f"with {len(page)} records, terminal={page.is_terminal}"
        )
        return page

    def __repr__(self) -> str:
        return f"Reader({self.descriptor.name}, path={self.path!r}, filters={self._filters!r})"
