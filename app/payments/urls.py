"""
URL configuration for the payments app.

Routes:
    - POST /affirm/confirm/ - Affirm checkout confirmed callback
    - GET /affirm/cancel/ - Affirm checkout canceled callback

All routes are prefixed with /api/v1/payments/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payments/", include("payments.urls")),
    ]
"""

from django.urls import path

from payments.callbacks.views import affirm_cancel, affirm_confirm

app_name = "payments"

urlpatterns = [
    # Affirm checkout callbacks
    path("affirm/confirm/", affirm_confirm, name="affirm_confirm"),
    path("affirm/cancel/", affirm_cancel, name="affirm_cancel"),
]
