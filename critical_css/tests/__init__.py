"""Tests for the critical CSS inliner."""
