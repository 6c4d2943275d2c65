"""
Core data models for the controller layer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# Set up logger for this module
logger = logging.getLogger(__name__)


class Headers:
    """
    Multi-value, case-insensitive headers container.

    Example::

        headers = Headers({'Accept': 'text/html'})
        headers.add('Accept', 'application/json')
        headers.get('accept')      # Returns 'text/html' (first value)
        headers.get_all('accept')  # Returns ['text/html', 'application/json']
    """

    def __init__(self, data=None):
        # Internal storage: Dict[lowercase_name, List[Tuple[original_name, value]]]
        self._headers: Dict[str, List[Tuple[str, str]]] = {}

        if data is None:
            return
        if isinstance(data, Headers):
            self._headers = {k: list(v) for k, v in data._headers.items()}
        elif isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, list):
                    for v in value:
                        self.add(key, v)
                else:
                    self.add(key, value)
        else:
            for key, value in data:
                self.add(key, value)

    def add(self, name: str, value: str) -> None:
        """Add a header value, allowing multiple values for the same name."""
        self._headers.setdefault(name.lower(), []).append((name, value))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value for a header name."""
        values = self._headers.get(name.lower())
        if values:
            return values[0][1]
        return default

    def get_all(self, name: str) -> List[str]:
        """Get all values for a header name (empty list if not found)."""
        return [value for _, value in self._headers.get(name.lower(), [])]

    def set(self, name: str, value: str) -> None:
        """Set a header to a single value, replacing any existing values."""
        self._headers[name.lower()] = [(name, value)]

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __len__(self):
        return len(self._headers)

    def items(self):
        """Return (name, first_value) pairs."""
        return [(values[0][0], values[0][1]) for values in self._headers.values() if values]

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def __repr__(self):
        return f"Headers({self.items()!r})"


def parse_accept(accept_header: Optional[str]) -> List[str]:
    """Parse an Accept header into media types ordered by quality value.

    Types with equal quality keep the order the client sent them in, and
    types with q=0 are dropped.
    """
    if not accept_header:
        return []

    weighted = []
    for position, part in enumerate(accept_header.split(",")):
        pieces = [p.strip() for p in part.split(";")]
        media_type = pieces[0].lower()
        if not media_type:
            continue
        quality = 1.0
        for param in pieces[1:]:
            if param.startswith("q="):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        if quality <= 0:
            continue
        weighted.append((-quality, position, media_type))

    return [media_type for _, _, media_type in sorted(weighted)]


@dataclass
class ControllerPrivate:
    """Framework bookkeeping for a connection.

    Kept apart from ``Connection.assigns`` so application data can never
    collide with the dispatcher's own state.
    """

    action: Optional[str] = None
    controller: Optional[type] = None
    named_params: Dict[str, Any] = field(default_factory=dict)
    # None means "use the default layout", False disables the layout
    layout: Union[str, bool, None] = None


@dataclass
class Connection:
    """Represents one request/response exchange as it moves through a pipeline.

    The router creates a Connection per request; pipeline steps and actions
    update it and hand it on. The response half (status, resp_content_type,
    resp_headers, resp_body) stays unset until something renders.
    """

    method: str
    path: str
    req_headers: Union[Dict[str, str], Headers] = field(default_factory=Headers)
    query_params: Dict[str, Any] = field(default_factory=dict)
    body_params: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    assigns: Dict[str, Any] = field(default_factory=dict)
    private: ControllerPrivate = field(default_factory=ControllerPrivate)
    accept: Optional[List[str]] = None
    status: Optional[int] = None
    resp_content_type: Optional[str] = None
    resp_headers: Headers = field(default_factory=Headers)
    resp_body: Optional[str] = None
    halted: bool = False

    def __post_init__(self):
        self.method = self.method.upper()
        if not isinstance(self.req_headers, Headers):
            self.req_headers = Headers(self.req_headers)
        if self.accept is None:
            self.accept = parse_accept(self.req_headers.get("accept"))

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a request header (case-insensitive)."""
        return self.req_headers.get(name, default)

    @property
    def sent(self) -> bool:
        """Whether a response body has been written."""
        return self.resp_body is not None
