"""Search pipeline orchestration."""
