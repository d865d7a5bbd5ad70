"""HTTP API over the persisted dataset."""
