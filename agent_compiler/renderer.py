"""Jinja2 rendering of agent documents."""

import logging

from jinja2 import ChoiceLoader
from jinja2 import Environment
from jinja2 import FileSystemLoader
from jinja2 import PackageLoader
from jinja2 import StrictUndefined
from jinja2 import TemplateError

from .errors import RenderError
from .paths import ProjectPaths
from .schema import AgentRenderContext

logger = logging.getLogger(__name__)

AGENT_TEMPLATE = "agent.md.j2"


def create_environment(paths: ProjectPaths) -> Environment:
    """
    Create the template environment.

    Templates in the project's templates/ directory take precedence over the
    packaged defaults.
    """
    return Environment(
        loader=ChoiceLoader(
            [
                FileSystemLoader(str(paths.templates_dir)),
                PackageLoader("agent_compiler", "data/templates"),
            ]
        ),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_agent(env: Environment, context: AgentRenderContext) -> str:
    """
    Render one agent document (frontmatter + body).

    Raises:
        RenderError: If the template is missing or fails to render
    """
    name = context.agent.name
    logger.debug(f"Rendering template for {name}...")
    try:
        template = env.get_template(AGENT_TEMPLATE)
        return template.render(**context.model_dump())
    except TemplateError as e:
        raise RenderError(name, str(e) or type(e).__name__) from e
