"""Products Shell — synchronous page frame hosting the logic stage as a nested task.

Invariants:
    - start() and render() never await: the frame is producible with no pending IO
    - Pending is always rendered before any terminal outcome
    - Resolved and Failed are mutually exclusive; a shell settles exactly once
    - Failure output is the generic error placeholder; error detail only goes to logs
    - An abandoned shell cancels its task; the cache never sees a partial write

Design Decisions:
    - Explicit BoundaryState machine (core/boundary.py) populated by an asyncio.Task,
      render() pure over the current state
    - stream() is the render host adapter: frame first, one patch chunk on settle
    - ProductsNavigation closes the loop edit -> address update -> new shell, and
      cancels the previous shell if it is still pending
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from storefront.core.boundary import (
    BoundaryState, BoundaryStatus, Failed, Pending, Resolved, is_settled, settle,
)
from storefront.core.domain_types import RenderPayload
from storefront.core.errors import StorefrontError
from storefront.core.product_params import QueryParameterSet, RawParams
from storefront.presentation.address import AddressState
from storefront.presentation.products_view import (
    ProductsView, render_error, render_loading,
)
from storefront.presentation.shell_frame import (
    render_boundary_patch, render_shell_close, render_shell_open,
)

logger = logging.getLogger(__name__)

Resolver = Callable[[RawParams], Awaitable[RenderPayload]]


class ProductsShell:
    """One render of the products page for one address snapshot."""

    def __init__(self, address: AddressState, resolver: Resolver):
        self.address = address
        self.state: BoundaryState = Pending()
        self._resolver = resolver
        self._raw = address.query
        self._task: asyncio.Task | None = None
        self._view: ProductsView | None = None

    def start(self) -> None:
        """Register the logic stage as a nested task. Idempotent."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(
                self._resolver(self._raw),
            )

    @property
    def view(self) -> ProductsView | None:
        if self._view is None and isinstance(self.state, Resolved):
            self._view = ProductsView(self.state.payload, self.address)
        return self._view

    def render_boundary(self) -> str:
        match self.state:
            case Resolved():
                return self.view.render()
            case Failed():
                return render_error()
            case _:
                return render_loading()

    def render(self) -> str:
        return (
            render_shell_open(self.state.status, self.render_boundary())
            + render_shell_close()
        )

    async def settle(self) -> BoundaryState:
        """Wait for the logic stage and record its terminal outcome."""
        if is_settled(self.state):
            return self.state
        self.start()
        try:
            payload = await self._task
        except Exception as e:
            if not is_settled(self.state):
                self._log_failure(e)
                self.state = settle(self.state, Failed(e))
        else:
            if not is_settled(self.state):
                self.state = settle(self.state, Resolved(payload))
        return self.state

    async def stream(self) -> AsyncIterator[str]:
        self.start()
        yield render_shell_open(BoundaryStatus.PENDING, render_loading())
        try:
            await self.settle()
        finally:
            if not is_settled(self.state):
                self.cancel()
                logger.info("Products render abandoned before resolve")
        yield render_boundary_patch(self.state.status, self.render_boundary())
        yield render_shell_close()

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def dispose(self) -> None:
        self.cancel()
        if self._view is not None:
            self._view.close()

    def _log_failure(self, exc: Exception) -> None:
        if isinstance(exc, StorefrontError):
            logger.error(
                f"Products resolve failed: {exc.message}",
                extra={"error_code": exc.code},
            )
        else:
            logger.error(f"Products resolve failed: {exc}", exc_info=exc)


class ProductsNavigation:
    """Client-side navigation loop: every address change starts a fresh shell."""

    def __init__(self, address: AddressState, resolver: Resolver):
        self.address = address
        self._resolver = resolver
        self.current = ProductsShell(address, resolver)
        self.current.start()
        self._unsubscribe = address.subscribe(self._on_address_change)

    def _on_address_change(self, params: QueryParameterSet) -> None:
        previous = self.current
        self.current = ProductsShell(self.address, self._resolver)
        self.current.start()
        previous.dispose()

    def close(self) -> None:
        self._unsubscribe()
        self.current.dispose()
