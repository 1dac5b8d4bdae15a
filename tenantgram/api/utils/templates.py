from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

# tenantgram/
#   api/utils/templates.py  (this file)
#   templates/
TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def render_template(name: str, context: Mapping[str, Any]) -> str:
    """
    Render a Jinja2 template to an HTML string.

    Example:
        html = render_template("password-reset-result.html", {"success": True, "message": "..."})
    """
    template = _env.get_template(name)
    return template.render(**context)
