"""HTTP API for the swap planner."""
