"""Kida environment for the blog front end.

The environment is created once per controller and reused for every
render. Templates ship inside the package (``garden/templates``).
"""

from typing import Any

from kida import Environment, PackageLoader


def create_environment(*, auto_reload: bool = False) -> Environment:
    """Create the kida Environment that renders the blog pages."""
    return Environment(
        loader=PackageLoader("garden", "templates"),
        autoescape=True,
        auto_reload=auto_reload,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a full template to string."""
    template = env.get_template(name)
    return template.render(context)


def render_fragment(env: Environment, name: str, block: str, context: dict[str, Any]) -> str:
    """Render one named block of a template."""
    template = env.get_template(name)
    return template.render_block(block, context)
