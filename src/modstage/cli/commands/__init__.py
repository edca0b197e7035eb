"""Top-level modstage commands."""
