"""Template Environment — Jinja2 loader for presentation templates."""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, select_autoescape


@lru_cache
def get_template_env() -> Environment:
    return Environment(
        loader=PackageLoader("storefront", "presentation/templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(name: str, **context) -> str:
    return get_template_env().get_template(name).render(**context)
