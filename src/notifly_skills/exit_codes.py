"""Exit codes for notifly-skills CLI commands.

Skipped MCP configuration (declined prompts, manual client, missing client
CLI) is not an error and exits with SUCCESS.
"""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
INVALID_ARGS = 2
SKILL_NOT_FOUND = 3
CONFIG_ERROR = 4
