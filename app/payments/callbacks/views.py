"""
Callback views for Affirm checkout.

These views are the thin presentation layer over CheckoutReconciler:
they validate the callback parameters, run the reconciler, flash its
notice and redirect wherever it routes.

Usage:
    # In urls.py
    from payments.callbacks.views import affirm_cancel, affirm_confirm

    urlpatterns = [
        path("affirm/confirm/", affirm_confirm, name="affirm_confirm"),
        path("affirm/cancel/", affirm_cancel, name="affirm_cancel"),
    ]
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import messages
from django.http import (
    HttpRequest,
    HttpResponse,
    HttpResponseBadRequest,
    HttpResponseNotFound,
)
from django.shortcuts import redirect
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from payments.callbacks.serializers import AffirmCancelSerializer, AffirmConfirmSerializer
from payments.exceptions import AffirmError, CheckoutMismatchError, OrderNotFoundError
from payments.services import INVALID_CONFIRMATION_NOTICE, CheckoutReconciler


logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def affirm_confirm(request: HttpRequest) -> HttpResponse:
    """
    Handle Affirm's "checkout confirmed" callback.

    Affirm redirects the customer's browser here with a form POST,
    so CSRF protection cannot apply.

    Returns:
        HttpResponse with status:
        - 302: Redirect to cart, order detail or checkout confirmation
        - 400: Invalid parameters, or Affirm's transaction belongs to
          another checkout
        - 404: Unknown or missing order
    """
    serializer = AffirmConfirmSerializer(data=request.POST)
    if not serializer.is_valid():
        logger.warning(
            "Affirm confirmation with invalid parameters",
            extra={"errors": serializer.errors},
        )
        return HttpResponseBadRequest(INVALID_CONFIRMATION_NOTICE)

    data = serializer.validated_data

    try:
        result = CheckoutReconciler().confirm(
            order_ref=data["order_number"],
            checkout_token=data["checkout_token"],
            payment_method_ref=data["payment_method_id"],
        )
    except OrderNotFoundError as e:
        logger.warning("Affirm confirmation for unknown order", extra=e.to_dict())
        return HttpResponseNotFound(e.message)
    except CheckoutMismatchError as e:
        logger.warning("Affirm confirmation mismatch", extra=e.to_dict())
        return HttpResponseBadRequest(e.message)
    except AffirmError as e:
        logger.error("Affirm confirmation could not be verified", extra=e.to_dict())
        messages.error(request, e.message)
        return redirect(settings.CHECKOUT_STATE_URL.format(state="payment"))

    if result.notice:
        messages.error(request, result.notice)

    return redirect(result.redirect_url)


@require_GET
def affirm_cancel(request: HttpRequest) -> HttpResponse:
    """
    Handle Affirm's "checkout canceled" callback.

    Always redirects to the cart; cancellation never changes the ledger.
    """
    serializer = AffirmCancelSerializer(data=request.GET)
    order_number = (
        serializer.validated_data["order_number"] if serializer.is_valid() else ""
    )

    result = CheckoutReconciler().cancel(order_number)

    messages.info(request, result.notice)
    return redirect(result.redirect_url)
