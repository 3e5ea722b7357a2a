"""Centralized constants for the cct package."""

# Source repository holding the published components
DEFAULT_OWNER = "StudentCristian"
DEFAULT_REPO = "copilot-learning-templates"
DEFAULT_BRANCH = "main"
COMPONENTS_ROOT = "cli-tool/components"

RAW_BASE_URL = "https://raw.githubusercontent.com"
API_BASE_URL = "https://api.github.com"
HOSTED_AGENTS_URL = "https://educopilot.com/api/agents.json"

USER_AGENT = "copilot-learning-templates"

# Directories written inside the target project
GITHUB_DIR = ".github"
VSCODE_DIR = ".vscode"
MCP_CONFIG_FILENAME = "mcp.json"

# A skill directory is only complete when this file is present
SKILL_MARKER = "SKILL.md"

# Downloaded files with these suffixes are made executable
EXECUTABLE_SUFFIXES = (".py", ".sh")

# Bounds for the skill directory walk
DEFAULT_MAX_SKILL_FILES = 200
DEFAULT_MAX_SKILL_DEPTH = 8

DEFAULT_TIMEOUT = 30.0

CONFIG_FILENAME = "cct.toml"
GLOBAL_DIR_NAME = ".cct"
