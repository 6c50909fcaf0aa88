"""Synthesize requirements, test cases and coverage metrics from normalized operations."""
