"""Tests for the translation management service.

Tests use pytest with pytest-django; HTTP tests go through DRF's APIClient.
"""
