"""Static configuration values for the moderation plugin."""

ACTION_COOLDOWN_SECONDS = 5

# Audit log reasons are capped by the platform
REASON_MAX_LENGTH = 512
