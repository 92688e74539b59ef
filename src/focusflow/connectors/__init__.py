"""Front ends that drive the FocusFlow app root."""
