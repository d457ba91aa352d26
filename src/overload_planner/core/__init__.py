"""Core load-estimation and progression logic for overload-planner."""
