"""Calculator version stamped on every output row."""

VERSION = "2025.11.0"
