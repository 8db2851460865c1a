"""Life Score backend package."""
