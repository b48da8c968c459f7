"""demokrat: voting backend with versioned admin sessions."""

__version__ = "0.1.0"
