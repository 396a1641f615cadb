"""Test suite for the goup project.

This package contains all tests for the goup project, organized by module:
- cli/: Tests for command line interface functionality
- core/: Tests for fetching, extraction, permissions and installation
- utils/: Tests for utility functions
"""
