"""
Generic fetch, create, update and delete operations for any ResourceDescriptor
"""

import logging
from typing import Any, Mapping, Optional

from .descriptor import ResourceDescriptor
from .error_mapper import RecordDecodeError, validate_response
from .http_client import HTTPClient, HttpMethod, Request, Response


logger = logging.getLogger(__name__)


def _add_post_params(request: Request, params: Optional[Mapping[str, Any]]) -> None:
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                request.add_post_param(key, item)
        else:
            request.add_post_param(key, value)


def _decode_instance(descriptor: ResourceDescriptor, response: Response) -> Any:
    try:
        payload = response.json()
    except (ValueError, UnicodeDecodeError) as e:
        raise RecordDecodeError(f"{descriptor.name} body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise RecordDecodeError(f"{descriptor.name} body must be a JSON object")

    return descriptor.decoder(payload)


def _execute(descriptor: ResourceDescriptor, client: HTTPClient, operation: str,
             method: str, path: str, params: Optional[Mapping[str, Any]] = None) -> Response:
    request = Request.for_domain(method, descriptor.domain, path, client.account_sid)
    _add_post_params(request, params)

    response = client.request(request)
    logger.debug(
        f"{descriptor.name} {operation} returned "
        f"{response.status_code if response is not None else 'no response'}"
    )

    return validate_response(
        response,
        descriptor.expected_status(operation),
        descriptor.failure_message(operation)
    )


def fetch(descriptor: ResourceDescriptor, client: HTTPClient, **path_params: Any) -> Any:
    """
    Fetch a single instance

    Raises:
        ApiConnectionError: If the server could not be reached
        ApiError: If the server answered with a failing status
        RecordDecodeError: If the body had an unexpected shape
    """
    path = descriptor.render(descriptor.instance_path, path_params)
    response = _execute(descriptor, client, 'fetch', HttpMethod.GET, path)
    return _decode_instance(descriptor, response)


def create(descriptor: ResourceDescriptor, client: HTTPClient,
           params: Optional[Mapping[str, Any]] = None, **path_params: Any) -> Any:
    """
    Create an instance in a collection

    Args:
        descriptor: Resource to create
        client: Transport
        params: Body parameters keyed by wire name; None values are omitted
        **path_params: Parameters of the collection path

    Returns:
        The created record
    """
    path = descriptor.render(descriptor.list_path, path_params)
    response = _execute(descriptor, client, 'create', HttpMethod.POST, path, params)
    return _decode_instance(descriptor, response)


def update(descriptor: ResourceDescriptor, client: HTTPClient,
           params: Optional[Mapping[str, Any]] = None, **path_params: Any) -> Any:
    path = descriptor.render(descriptor.instance_path, path_params)
    response = _execute(descriptor, client, 'update', HttpMethod.POST, path, params)
    return _decode_instance(descriptor, response)


def delete(descriptor: ResourceDescriptor, client: HTTPClient, **path_params: Any) -> bool:
    path = descriptor.render(descriptor.instance_path, path_params)
    _execute(descriptor, client, 'delete', HttpMethod.DELETE, path)
    return True
