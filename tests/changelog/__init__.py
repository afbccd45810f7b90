"""Tests for changelog generation."""
