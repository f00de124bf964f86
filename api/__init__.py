"""Card Reader HTTP API."""
