"""codeguide: explain selected source code with Gemini."""

__app_name__ = "codeguide"
__version__ = "0.1.0"
