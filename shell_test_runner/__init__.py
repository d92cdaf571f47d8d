"""Run shell test scripts in parallel and collect their results."""
