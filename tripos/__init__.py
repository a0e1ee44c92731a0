"""Trip OS - AI travel planner service."""
