"""Address State — the navigable query representation and its subscribers.

Invariants:
    - Single source of truth for query params; bound values are derived caches
    - Recognized keys (q, page) are always stored in encoded form: defaults removed,
      malformed values normalized away
    - Unknown keys are preserved untouched
    - Subscribers are notified synchronously, in subscription order, only on change

Design Decisions:
    - Plain callbacks over an event bus: one page, one address, no fan-out across processes
"""

import logging
from collections.abc import Callable, Mapping
from urllib.parse import urlencode

from storefront.core.product_params import (
    QueryParameterSet, RawParams, decode, encode,
)

logger = logging.getLogger(__name__)

AddressListener = Callable[[QueryParameterSet], None]

_RECOGNIZED = ("q", "page")


def _flatten(raw: RawParams) -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            flat[key] = value
        elif value:
            flat[key] = str(value[0])
    return flat


def _normalize(query: dict[str, str]) -> dict[str, str]:
    normalized = {k: v for k, v in query.items() if k not in _RECOGNIZED}
    normalized.update(encode(decode(query)))
    return normalized


class AddressState:
    """Current path + query of the products page."""

    def __init__(self, path: str = "/products", raw: RawParams | None = None):
        self.path = path
        self._query = _normalize(_flatten(raw or {}))
        self._listeners: list[AddressListener] = []

    @property
    def params(self) -> QueryParameterSet:
        return decode(self._query)

    @property
    def query(self) -> dict[str, str]:
        return dict(self._query)

    @property
    def url(self) -> str:
        qs = urlencode(self._query)
        return f"{self.path}?{qs}" if qs else self.path

    def get(self, key: str) -> str | None:
        return self._query.get(key)

    def update(self, changes: Mapping[str, str | None]) -> bool:
        """Apply changes (None removes a key). Returns True if the address changed."""
        query = dict(self._query)
        for key, value in changes.items():
            if value is None:
                query.pop(key, None)
            else:
                query[key] = value
        query = _normalize(query)
        if query == self._query:
            return False

        self._query = query
        params = self.params
        logger.debug("Address updated", extra={"query": params.q, "page": params.page})
        for listener in list(self._listeners):
            listener(params)
        return True

    def subscribe(self, listener: AddressListener) -> Callable[[], None]:
        """Register listener; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
