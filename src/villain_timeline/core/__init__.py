"""Run orchestration: shared context, error taxonomy, pipeline runner."""
