"""Test doubles for engine tests."""
