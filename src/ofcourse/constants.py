"""Constants and defaults for ofcourse.

This module contains the protocol's reserved names, log level names and
colors, and the file names used by the scaffolding command. Import from here
instead of hardcoding values.
"""

from typing import Final

# =============================================================================
# VERSION
# =============================================================================
VERSION: Final[str] = "0.1.0"

# =============================================================================
# COMMANDS
# =============================================================================
COMMAND_CHECK: Final[str] = "check"
COMMAND_IN: Final[str] = "in"
COMMAND_OUT: Final[str] = "out"

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1

# =============================================================================
# RESOURCE LOGGER
# =============================================================================
# Source key a pipeline uses to choose the resource's log level
LOG_LEVEL_KEY: Final[str] = "log_level"

ERROR_LEVEL: Final[str] = "error"
WARN_LEVEL: Final[str] = "warn"
INFO_LEVEL: Final[str] = "info"
DEBUG_LEVEL: Final[str] = "debug"

DEFAULT_LOG_LEVEL: Final[str] = INFO_LEVEL

# click.style foreground colors, rendered bright like the Concourse UI expects
LEVEL_COLORS: Final[dict[str, str]] = {
    ERROR_LEVEL: "bright_red",
    WARN_LEVEL: "bright_yellow",
    INFO_LEVEL: "bright_green",
    DEBUG_LEVEL: "bright_blue",
}

# =============================================================================
# CLI LOGGING
# =============================================================================
LIBRARY_LOGGER: Final[str] = "ofcourse"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# SCAFFOLDING
# =============================================================================
CONFIG_FILE_NAME: Final[str] = ".ofcourse.yaml"
TEMPLATE_PACKAGE: Final[str] = "ofcourse.templates"
TEMPLATE_DIR: Final[str] = "resource"
TEMPLATE_SUFFIX: Final[str] = ".tmpl"
