"""CLI module for the triage command."""
