"""Query State Binding — two-way bound client value for the `q` param.

Invariants:
    - On mount the local value equals the address value (default "" when absent)
    - set() updates the local value first, then pushes to the address, synchronously
    - External address changes resync the local value; the address always wins
"""

from storefront.core.product_params import QueryParameterSet
from storefront.presentation.address import AddressState


class QueryStateBinding:
    """Local mirror of address.params.q with push-on-edit."""

    def __init__(self, address: AddressState):
        self._address = address
        self._value = address.params.q
        self._unsubscribe = address.subscribe(self._on_address_change)

    @property
    def value(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        self._value = value
        self._address.update({"q": value})

    def unmount(self) -> None:
        self._unsubscribe()

    def _on_address_change(self, params: QueryParameterSet) -> None:
        self._value = params.q
