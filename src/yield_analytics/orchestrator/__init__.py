"""Fetch cycle orchestration and dataset persistence."""
