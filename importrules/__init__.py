"""Rule-based batch configuration of asset import settings."""
