"""Static configuration values for the information plugin."""

# Seconds before the latency probe gives up
PROBE_TIMEOUT_SECONDS = 5.0

LATENCY_UNAVAILABLE = "Unable to retrieve latency :("
