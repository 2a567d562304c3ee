"""Command groups for bedrockgen CLI."""

from bedrockgen.commands.config import config_group
from bedrockgen.commands.hld import hld_group
from bedrockgen.commands.pipeline import pipeline_group
from bedrockgen.commands.project import project_group
from bedrockgen.commands.service import service_group

__all__ = ["config_group", "hld_group", "pipeline_group", "project_group", "service_group"]
