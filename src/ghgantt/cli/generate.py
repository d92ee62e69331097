"""Generate command for creating a default ghgantt.yml."""

import logging
from pathlib import Path

import yaml

from ..models import GanttConfig
from ..services.config_service import ConfigService
from .output import info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = ConfigService.CONFIG_FILE

# Header comments for generated file
CONFIG_HEADER = """\
# ghgantt Configuration
#
# repository: The single GitHub repository whose issues are mirrored
#   - owner / name: e.g. owner: octocat, name: hello-world
#   - per_page: Issues fetched per request (1-100)
#
# keywords: Line prefixes recognised in issue bodies
#   - A line counts only when it starts with the prefix
#   - Dates: YYYY-MM-DD, YYYY/MM/DD, MM/DD/YYYY or MM-DD-YYYY
#     (ISO datetimes with an offset such as 2024-03-15T20:00:00-05:00 are
#     converted to UTC, so the chart may show the next or previous day)
#   - Label: name of a label attached to the issue (sets the bar colour)
#   - Progress: 0.4 or 40%
#
# Example issue body:
#   Start Date: 2024-03-01
#   Due Date: 2024-03-15
#   Label: backend
#   Progress: 40%
#
# chart.date_format: strftime format of chart dates (front end expects mm-dd-yyyy)

"""


def generate_config_yaml(owner: str = "OWNER", name: str = "REPOSITORY") -> str:
    """Generate YAML config from the default GanttConfig model.

    Args:
        owner: Repository owner placeholder to write
        name: Repository name placeholder to write
    """
    config_dict = GanttConfig.default().model_dump()
    config_dict["repository"] = {"owner": owner, "name": name, "per_page": 100}

    # Keep repository right after version
    ordered = {key: config_dict[key] for key in ("version", "repository", "keywords", "chart")}
    yaml_content = yaml.dump(ordered, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """
    Generate default configuration.

    Args:
        project_root: Path to project root where ghgantt.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    if not project_root.exists():
        project_root.mkdir(parents=True)

    config_path.write_text(generate_config_yaml())
    success(f"Generated config: {config_path}")
    info("Set repository.owner and repository.name before syncing")
    return 0
