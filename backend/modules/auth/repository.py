"""
User repository for graph access.

Encapsulates all Cypher and row mapping for (:User) nodes.
"""

from datetime import date, datetime
from typing import Any, Optional

from shared.repository import BaseRepository
from shared.clock import parse_date
from .models import UserRecord


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    Email uniqueness is enforced by a database constraint; violations
    surface from the graph layer as ConflictError.
    """

    def find_by_email(self, email: str, tx: Optional[Any] = None) -> Optional[UserRecord]:
        rows = self._graph.read(
            """
            MATCH (u:User {email: $email})
            RETURN u { .* } AS user
            """,
            {"email": email},
            tx,
        )
        return self._map_to_user(rows[0]["user"]) if rows else None

    def find_by_id(self, user_id: str, tx: Optional[Any] = None) -> Optional[UserRecord]:
        rows = self._graph.read(
            """
            MATCH (u:User {id: $userId})
            RETURN u { .* } AS user
            """,
            {"userId": user_id},
            tx,
        )
        return self._map_to_user(rows[0]["user"]) if rows else None

    def create(
        self,
        email: str,
        password_hash: str,
        date_of_birth: date,
        created_at: datetime,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        tx: Optional[Any] = None,
    ) -> UserRecord:
        """
        Create a user with a generated ID.

        Returns:
            The created UserRecord.
        """
        rows = self._graph.write(
            """
            CREATE (u:User)
            SET u += $properties, u.id = randomUUID()
            RETURN u { .* } AS user
            """,
            {
                "properties": {
                    "email": email,
                    "password": password_hash,
                    "dateOfBirth": date_of_birth,
                    "firstName": first_name,
                    "lastName": last_name,
                    "createdAt": created_at,
                },
            },
            tx,
        )
        return self._map_to_user(rows[0]["user"])

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map a user projection to a UserRecord."""
        return UserRecord(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data.get("password") or "",
            date_of_birth=parse_date(data.get("dateOfBirth")),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            created_at=data.get("createdAt"),
        )
