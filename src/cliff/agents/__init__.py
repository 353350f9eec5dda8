"""Action protocol and planner client."""
