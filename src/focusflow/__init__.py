"""FocusFlow: daily thought journal and one-shot task reminders."""

__version__ = "0.1.0"
