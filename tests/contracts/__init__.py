"""Tests for contracts package: the error taxonomy and result types."""
