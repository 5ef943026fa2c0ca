"""GitHub access for label-sync."""
