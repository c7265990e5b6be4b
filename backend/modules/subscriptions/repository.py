"""
Subscription repository for graph access.

Encapsulates all Cypher and row mapping for:
- (:User)-[:PURCHASED]->(:Subscription)-[:FOR_PLAN]->(:Plan)
- (:Plan)-[:PROVIDES_ACCESS_TO]->(:Genre)
"""

from datetime import datetime
from typing import Any, Optional, Sequence

from shared.repository import BaseRepository
from .models import (
    Plan,
    PlanGenre,
    Subscription,
    SubscriptionStatus,
    duration_in_days,
)


_PLAN_PROJECTION = """
    p {
        .id, .name, .price, .duration,
        genres: [ (p)-[:PROVIDES_ACCESS_TO]->(g:Genre) | g { .id, .name } ]
    }
"""

_SUBSCRIPTION_RETURN = f"""
    RETURN s {{ .* }} AS subscription,
        u.id AS userId,
        {_PLAN_PROJECTION} AS plan
"""


class SubscriptionRepository(BaseRepository[Subscription]):
    """
    Repository for subscription and plan data access.

    Note: This repository does NOT enforce lifecycle rules.
    The service layer is responsible for status transitions.
    """

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def list_plans(self, tx: Optional[Any] = None) -> list[Plan]:
        """List plans with a positive price, cheapest first."""
        rows = self._graph.read(
            f"""
            MATCH (p:Plan)
            WHERE p.price > 0
            RETURN {_PLAN_PROJECTION} AS plan
            ORDER BY p.price ASC, p.id ASC
            """,
            {},
            tx,
        )
        return [self._map_to_plan(row["plan"]) for row in rows]

    def get_plan(self, plan_id: int, tx: Optional[Any] = None) -> Optional[Plan]:
        """Get a plan with its genres, or None."""
        rows = self._graph.read(
            f"""
            MATCH (p:Plan {{id: $planId}})
            RETURN {_PLAN_PROJECTION} AS plan
            """,
            {"planId": plan_id},
            tx,
        )
        if not rows:
            return None
        return self._map_to_plan(rows[0]["plan"])

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def user_exists(self, user_id: str, tx: Optional[Any] = None) -> bool:
        rows = self._graph.read(
            """
            MATCH (u:User {id: $userId})
            RETURN u.id AS id
            """,
            {"userId": user_id},
            tx,
        )
        return bool(rows)

    # -------------------------------------------------------------------------
    # Subscription writes
    # -------------------------------------------------------------------------

    def create(
        self,
        user_id: str,
        plan_id: int,
        status: SubscriptionStatus,
        created_at: datetime,
        expires_at: datetime,
        order_id: Optional[str] = None,
        tx: Optional[Any] = None,
    ) -> Subscription:
        """
        Create a subscription node linked to its user and plan.

        ``renewsAt`` starts equal to ``expiresAt``.
        """
        rows = self._graph.write(
            f"""
            MATCH (u:User {{id: $userId}})
            MATCH (p:Plan {{id: $planId}})
            CREATE (u)-[:PURCHASED]->(s:Subscription {{
                id: randomUUID(),
                status: $status,
                orderId: $orderId,
                createdAt: $createdAt,
                expiresAt: $expiresAt,
                renewsAt: $expiresAt
            }})-[:FOR_PLAN]->(p)
            {_SUBSCRIPTION_RETURN}
            """,
            {
                "userId": user_id,
                "planId": plan_id,
                "status": status.value,
                "orderId": order_id,
                "createdAt": created_at,
                "expiresAt": expires_at,
            },
            tx,
        )
        return self._map_to_subscription(rows[0])

    def activate(
        self,
        subscription_id: str,
        activated_at: datetime,
        expires_at: datetime,
        tx: Optional[Any] = None,
    ) -> Subscription:
        """Mark a subscription active with a fresh validity window."""
        rows = self._graph.write(
            f"""
            MATCH (u:User)-[:PURCHASED]->(s:Subscription {{id: $subscriptionId}})-[:FOR_PLAN]->(p:Plan)
            SET s.status = $status,
                s.activatedAt = $activatedAt,
                s.expiresAt = $expiresAt,
                s.renewsAt = $expiresAt
            {_SUBSCRIPTION_RETURN}
            """,
            {
                "subscriptionId": subscription_id,
                "status": SubscriptionStatus.ACTIVE.value,
                "activatedAt": activated_at,
                "expiresAt": expires_at,
            },
            tx,
        )
        return self._map_to_subscription(rows[0])

    def cancel(
        self,
        subscription_id: str,
        cancelled_at: datetime,
        tx: Optional[Any] = None,
    ) -> Subscription:
        """Mark one subscription cancelled and drop its renewal date."""
        rows = self._graph.write(
            f"""
            MATCH (u:User)-[:PURCHASED]->(s:Subscription {{id: $subscriptionId}})-[:FOR_PLAN]->(p:Plan)
            SET s.status = $status,
                s.cancelledAt = $cancelledAt
            REMOVE s.renewsAt
            {_SUBSCRIPTION_RETURN}
            """,
            {
                "subscriptionId": subscription_id,
                "status": SubscriptionStatus.CANCELLED.value,
                "cancelledAt": cancelled_at,
            },
            tx,
        )
        return self._map_to_subscription(rows[0])

    def supersede(
        self,
        user_id: str,
        keep_id: str,
        statuses: Sequence[SubscriptionStatus],
        cancelled_at: datetime,
        tx: Optional[Any] = None,
    ) -> int:
        """
        Cancel the user's other subscriptions in the given statuses.

        Returns:
            Number of subscriptions cancelled.
        """
        rows = self._graph.write(
            """
            MATCH (u:User {id: $userId})-[:PURCHASED]->(s:Subscription)
            WHERE s.status IN $statuses AND s.id <> $keepId
            SET s.status = $cancelled,
                s.cancelledAt = $cancelledAt
            REMOVE s.renewsAt
            RETURN count(s) AS superseded
            """,
            {
                "userId": user_id,
                "keepId": keep_id,
                "statuses": [status.value for status in statuses],
                "cancelled": SubscriptionStatus.CANCELLED.value,
                "cancelledAt": cancelled_at,
            },
            tx,
        )
        return rows[0]["superseded"] if rows else 0

    # -------------------------------------------------------------------------
    # Subscription reads
    # -------------------------------------------------------------------------

    def find_by_id(self, subscription_id: str, tx: Optional[Any] = None) -> Optional[Subscription]:
        rows = self._graph.read(
            f"""
            MATCH (u:User)-[:PURCHASED]->(s:Subscription {{id: $subscriptionId}})-[:FOR_PLAN]->(p:Plan)
            {_SUBSCRIPTION_RETURN}
            """,
            {"subscriptionId": subscription_id},
            tx,
        )
        return self._map_to_subscription(rows[0]) if rows else None

    def find_by_order(self, order_id: str, tx: Optional[Any] = None) -> Optional[Subscription]:
        rows = self._graph.read(
            f"""
            MATCH (u:User)-[:PURCHASED]->(s:Subscription {{orderId: $orderId}})-[:FOR_PLAN]->(p:Plan)
            {_SUBSCRIPTION_RETURN}
            ORDER BY s.createdAt DESC
            LIMIT 1
            """,
            {"orderId": order_id},
            tx,
        )
        return self._map_to_subscription(rows[0]) if rows else None

    def find_current(
        self,
        user_id: str,
        now: datetime,
        statuses: Sequence[SubscriptionStatus],
        tx: Optional[Any] = None,
    ) -> Optional[Subscription]:
        """The unexpired subscription in ``statuses`` that expires last."""
        rows = self._graph.read(
            f"""
            MATCH (u:User {{id: $userId}})-[:PURCHASED]->(s:Subscription)-[:FOR_PLAN]->(p:Plan)
            WHERE s.status IN $statuses AND s.expiresAt >= $now
            {_SUBSCRIPTION_RETURN}
            ORDER BY s.expiresAt DESC, s.id ASC
            LIMIT 1
            """,
            {
                "userId": user_id,
                "now": now,
                "statuses": [status.value for status in statuses],
            },
            tx,
        )
        return self._map_to_subscription(rows[0]) if rows else None

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_plan(self, data: dict[str, Any]) -> Plan:
        """Map a plan projection to a Plan model (payment identifiers are dropped)."""
        return Plan(
            id=data["id"],
            name=data["name"],
            price=data.get("price") or 0,
            duration_days=duration_in_days(data["duration"]),
            genres=[
                PlanGenre(id=g["id"], name=g["name"])
                for g in sorted(data.get("genres") or [], key=lambda g: g["name"])
            ],
        )

    def _map_to_subscription(self, row: dict[str, Any]) -> Subscription:
        """Map a subscription row (subscription, userId, plan) to a model."""
        data = row["subscription"]
        plan = self._map_to_plan(row["plan"]) if row.get("plan") else None

        return Subscription(
            id=str(data["id"]),
            user_id=str(row["userId"]),
            plan_id=plan.id if plan else data.get("planId"),
            status=SubscriptionStatus(data["status"]),
            order_id=data.get("orderId"),
            created_at=data.get("createdAt"),
            expires_at=data["expiresAt"],
            renews_at=data.get("renewsAt"),
            plan=plan,
        )
