"""Rule engine: domain model, detectors and advisors."""
