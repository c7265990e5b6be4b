"""
Plan, checkout and subscription API endpoints.

Payment sessions are created with the payment provider by the client;
these endpoints record the resulting order IDs. Confirmation is the
provider's callback and is admitted only with the shared webhook secret.
"""

from typing import Optional
from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user, verify_payment_callback
from api.dependencies import get_subscription_service
from shared.models import AuthenticatedUser

from .interfaces import ISubscriptionService
from .models import CheckoutRequest, Plan, Subscription, VerifyCheckoutRequest

plans_router = APIRouter()
checkout_router = APIRouter()
router = APIRouter()


@plans_router.get("", response_model=list[Plan])
async def list_plans(
    service: ISubscriptionService = Depends(get_subscription_service),
) -> list[Plan]:
    """List purchasable plans, cheapest first."""
    return await service.list_plans()


@checkout_router.post("", response_model=Subscription, status_code=201)
async def start_checkout(
    request: CheckoutRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """Record a pending subscription for a payment order."""
    return await service.start_checkout(user.id, request.plan_id, request.order_id)


@checkout_router.post(
    "/verify",
    response_model=Subscription,
    dependencies=[Depends(verify_payment_callback)],
)
async def verify_checkout(
    request: VerifyCheckoutRequest,
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """
    Confirm a paid order on behalf of the payment provider.

    Safe to call repeatedly for the same order.
    """
    return await service.confirm_checkout(request.id)


@router.get("/current", response_model=Optional[Subscription])
async def get_current_subscription(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Optional[Subscription]:
    return await service.get_current_subscription(user.id)


@router.post("/{subscription_id}/cancel", response_model=Subscription)
async def cancel_subscription(
    subscription_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    """
    Cancel one of the caller's subscriptions.

    Access continues until the subscription expires.
    """
    return await service.cancel_subscription(subscription_id, user_id=user.id)
