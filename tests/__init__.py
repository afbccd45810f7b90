"""Tests for gitver."""
