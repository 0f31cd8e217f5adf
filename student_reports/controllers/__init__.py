"""Request controllers for the student report service."""
