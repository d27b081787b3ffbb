"""Shell Frame — the static page frame around the products boundary.

The frame is split in three renderable parts so it can be streamed: the
opening frame (with whatever the boundary currently shows), a patch that
swaps the boundary content in place once it settles, and the closing frame
carrying the search-box client script.
"""

from storefront.core.boundary import BoundaryStatus
from storefront.presentation.template_env import render_template

RESULTS_PATH = "/products/results"
SEARCH_DEBOUNCE_MS = 250


def render_shell_open(status: BoundaryStatus, boundary_html: str) -> str:
    return render_template(
        "shell_open.html.j2", state=status.value, boundary=boundary_html,
    )


def render_boundary_patch(status: BoundaryStatus, boundary_html: str) -> str:
    return render_template(
        "boundary_patch.html.j2", state=status.value, boundary=boundary_html,
    )


def render_shell_close() -> str:
    return render_template(
        "shell_close.html.j2",
        results_path=RESULTS_PATH,
        debounce_ms=SEARCH_DEBOUNCE_MS,
    )
