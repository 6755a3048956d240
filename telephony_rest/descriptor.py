"""
ResourceDescriptor module describing one REST resource as data
"""

from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

from .http_client import Domains


DEFAULT_SUCCESS_STATUS = {
    'read': 200,
    'fetch': 200,
    'create': 201,
    'update': 200,
    'delete': 204,
}

# Verb used in the fixed connection failure message of each operation
FAILURE_VERBS = {
    'read': 'read',
    'fetch': 'fetch',
    'create': 'creation',
    'update': 'update',
    'delete': 'delete',
}


def template_fields(template: str) -> Tuple[str, ...]:
    return tuple(name for _, name, _, _ in Formatter().parse(template) if name)


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    Everything the generic engine needs to know about one resource

    Attributes:
        name: Resource name used in error messages, e.g. "Conference"
        decoder: Callable turning one JSON object into a record
        records_key: Field holding the records array in collection responses
        list_path: Path template of the collection endpoint
        instance_path: Path template of a single instance
        domain: API domain the resource lives on
        filters: Reader filter names mapped to their wire query parameter names
        success_status: Expected success status per operation
    """
    name: str
    decoder: Callable[[Dict[str, Any]], Any]
    records_key: Optional[str] = None
    list_path: Optional[str] = None
    instance_path: Optional[str] = None
    domain: str = Domains.API
    filters: Dict[str, str] = field(default_factory=dict)
    success_status: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_SUCCESS_STATUS))

    def expected_status(self, operation: str) -> int:
        return self.success_status.get(operation, DEFAULT_SUCCESS_STATUS[operation])

    def failure_message(self, operation: str) -> str:
        return f"{self.name} {FAILURE_VERBS[operation]} failed: Unable to connect to server"

    def render(self, template: Optional[str], path_params: Dict[str, Any]) -> str:
        """
        Substitute path parameters into a path template

        Raises:
            ValueError: If the template is not defined or a path parameter is missing
        """
        if template is None:
            raise ValueError(f"{self.name} does not support this operation")

        missing = [name for name in template_fields(template) if path_params.get(name) is None]
        if missing:
            raise ValueError(f"Missing path parameters for {self.name}: {', '.join(missing)}")

        return template.format(**{
            name: quote(str(value), safe='') for name, value in path_params.items()
        })
