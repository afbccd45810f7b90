"""Tests for the Git providers."""
