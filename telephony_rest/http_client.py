"""
HTTPClient module for building REST requests and dispatching them to the telephony API
"""

import io
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin

import requests

from .config_loader import ClientConfig, ConfigLoader


logger = logging.getLogger(__name__)


class HttpMethod:
    """HTTP verbs used by resource operations"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Domains:
    """Names of the API domains a request can target"""
    API = "api"
    CONVERSATIONS = "conversations"
    PRICING = "pricing"
    TASKROUTER = "taskrouter"


def to_wire(value: Any) -> str:
    """Render a parameter value the way the API expects it"""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    return str(value)


@dataclass
class Request:
    """
    Transport-agnostic description of one outbound call

    A request either targets a domain-relative path (path parameters already
    substituted) or a literal locator URL handed back by the server.
    """
    method: str
    path: str
    principal: Optional[str] = None
    domain: Optional[str] = None
    query_params: List[Tuple[str, str]] = field(default_factory=list)
    post_params: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def for_domain(cls, method: str, domain: str, path: str,
                   principal: Optional[str] = None) -> "Request":
        return cls(method=method, path=path, principal=principal, domain=domain)

    @classmethod
    def for_url(cls, method: str, url: str, principal: Optional[str] = None,
                domain: Optional[str] = None) -> "Request":
        """Request against a literal locator; no filters are re-applied"""
        return cls(method=method, path=url, principal=principal, domain=domain)

    def add_query_param(self, key: str, value: Any) -> "Request":
        self.query_params.append((key, to_wire(value)))
        return self

    def add_post_param(self, key: str, value: Any) -> "Request":
        self.post_params.append((key, to_wire(value)))
        return self

    def build_url(self, config: ClientConfig) -> str:
        """
        Resolve the request target to an absolute URL

        Args:
            config: Client configuration holding the domain base URLs

        Returns:
            Absolute URL for the request

        Raises:
            ValueError: If the request names a domain with no configured base URL
        """
        if self.path.startswith(("http://", "https://")):
            return self.path

        domain = self.domain or Domains.API
        base_url = config.domains.get(domain)
        if base_url is None:
            raise ValueError(f"No base URL configured for domain: {domain}")

        return urljoin(base_url.rstrip("/") + "/", self.path.lstrip("/"))


@dataclass
class Response:
    """Inbound result of a dispatched Request"""
    status_code: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def stream(self) -> io.BytesIO:
        return io.BytesIO(self.content)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


class HTTPClient:
    """Transport that executes Requests against the telephony API with a requests Session"""

    def __init__(self, config: ClientConfig):
        self.config = config
        self.headers: Dict[str, str] = {"Accept": "application/json"}
        self.auth: Optional[Tuple[str, str]] = None
        self.session: Optional[requests.Session] = None

    @property
    def account_sid(self) -> str:
        return self.config.account_sid

    def authenticate(self, credentials: Dict[str, Any]) -> None:
        """
        Configure authentication based on credential type

        Args:
            credentials: Dictionary containing authentication information

        Raises:
            ValueError: If authentication type is not supported
        """
        auth_type = credentials.get('type')

        if auth_type == 'basic':
            username = credentials.get('username', self.config.account_sid)
            self.auth = (username, credentials['password'])

        elif auth_type == 'bearer_token':
            self.headers['Authorization'] = f"Bearer {credentials['token']}"

        else:
            raise ValueError(f"Unsupported authentication type: {auth_type}")

    def authenticate_from_config(self) -> None:
        """
        Resolve credentials referenced by the configuration and authenticate

        Raises:
            EnvironmentVariableError: If a referenced environment variable is not set
        """
        auth_config = self.config.authentication
        credentials: Dict[str, Any] = {'type': auth_config.get('type')}

        for key, value in auth_config.items():
            if key.endswith('_env'):
                credentials[key[:-len('_env')]] = ConfigLoader.get_environment_value(value)
            elif key != 'type':
                credentials[key] = value

        self.authenticate(credentials)

    def request(self, request: Request) -> Optional[Response]:
        """
        Dispatch a Request and return the Response

        Args:
            request: Fully built Request

        Returns:
            Response for any status code, or None if the server could not be reached
        """
        if self.session is None:
            self.session = requests.Session()

        url = request.build_url(self.config)
        logger.debug(f"{request.method} {url} query={request.query_params}")

        try:
            http_response = self.session.request(
                request.method,
                url,
                params=request.query_params or None,
                data=request.post_params or None,
                headers=self.headers,
                auth=self.auth,
                timeout=self.config.timeout_seconds
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"No response for {request.method} {url}: {e}")
            return None

        return Response(
            status_code=http_response.status_code,
            content=http_response.content or b"",
            headers=dict(http_response.headers)
        )

    def close_connection(self) -> None:
        """
        Close HTTP session and release resources
        """
        if self.session:
            self.session.close()
            self.session = None
