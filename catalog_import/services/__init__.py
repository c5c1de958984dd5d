"""Run orchestration, mapping review helpers, progress and summary output."""
