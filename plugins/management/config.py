"""Static configuration values for the plugin management commands."""

TOGGLE_COOLDOWN_SECONDS = 10
