"""Protocol-backed domains."""
