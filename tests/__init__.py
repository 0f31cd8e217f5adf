"""Tests for the student report service."""
