"""
Tests for payments app.

This package contains test modules for:
- test_models.py: AffirmTransaction constraint and compare-and-set tests
- test_results.py: OperationResult construction tests

Service, adapter, ledger and callback tests live beside their packages.

Usage:
    pytest app/payments/
    pytest app/payments/services/tests/test_checkout_reconciler.py
"""
