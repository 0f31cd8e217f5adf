"""Service integrations for the student report service."""
