"""
Project-wide pytest configuration and fixtures.

App-specific fixtures are defined in each app's tests/conftest.py.
"""

import pytest


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full callback round trips)
    - test_views.py, test_services.py, test_checkout_reconciler.py, etc. → integration
    - test_models.py, test_results.py, test_affirm_client.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    # Filename patterns for each category
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_affirm_gateway.py",
        "test_checkout_reconciler.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_results.py",
        "test_types.py",
        "test_affirm_client.py",
        "test_exceptions.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name

        # Check patterns in priority order
        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def affirm_settings(settings):
    """Affirm sandbox credentials and default routing for every test."""
    settings.AFFIRM_PUBLIC_API_KEY = "PUBLIC_API_KEY"
    settings.AFFIRM_PRIVATE_API_KEY = "PRIVATE_API_KEY"
    settings.AFFIRM_TEST_MODE = True
    settings.AFFIRM_API_TIMEOUT_SECONDS = 10
    settings.CHECKOUT_STATE_URL = "/checkout/{state}"
    settings.ORDER_DETAIL_URL = "/orders/{number}"
    return settings
