"""Tests for the craps engine."""
