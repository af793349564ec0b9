"""codeguide configuration constants."""

from codeguide import __app_name__, __version__

APP_NAME: str = __app_name__
VERSION: str = __version__

# ---------------------------------------------------------------------------
# Settings files
# ---------------------------------------------------------------------------

# Project-scoped settings live at <project>/.codeguide/settings.json
SETTINGS_DIRNAME: str = ".codeguide"
SETTINGS_FILENAME: str = "settings.json"

# Namespaced setting holding the Gemini API key, in both the project and
# the user settings document.
API_KEY_SETTING: str = "codeguide.geminiApiKey"

# Markers used to locate the project root when none is given.
PROJECT_ROOT_MARKERS: list[str] = [
    SETTINGS_DIRNAME,
    ".git",
]

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

API_KEY_ENV_VAR: str = "CODEGUIDE_GEMINI_API_KEY"
CONFIG_HOME_ENV_VAR: str = "CODEGUIDE_CONFIG_HOME"
DEFAULT_ROOT_ENV_VAR: str = "CODEGUIDE_DEFAULT_ROOT"

# ---------------------------------------------------------------------------
# Gemini endpoint
# ---------------------------------------------------------------------------

API_BASE_URL: str = "https://generativelanguage.googleapis.com"
ENDPOINT_TEMPLATE: str = "{base}/v1/models/{model}:generateContent"
DEFAULT_MODEL: str = "gemini-2.5-flash"

INSTRUCTION: str = "Explain the following code clearly and concisely:\n\n"
NO_EXPLANATION_TEXT: str = "⚠️ No explanation received."
