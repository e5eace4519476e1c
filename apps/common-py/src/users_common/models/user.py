"""User models for the Users API."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

USERS_PARTITION = "users"


class User(BaseModel):
    """Public view of a user record.

    Has no password attribute, so any instance can be serialized straight
    into a response.
    """

    id: str = Field(..., description="Unique identifier assigned by the store")
    name: str = Field(..., description="Full name of the user")
    email: str = Field(..., description="Email address of the user, lower-cased")
    is_active: bool = Field(default=True, alias="isActive", description="Whether the user is active")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), alias="createdAt", description="Creation timestamp"
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), alias="updatedAt", description="Last update timestamp"
    )

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "0b6f1f0e-3f64-4a53-9a35-2f1f6b8a2c11",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "isActive": True,
                "createdAt": "2024-01-01T00:00:00+00:00",
                "updatedAt": "2024-01-01T00:00:00+00:00",
            }
        },
    )


class UserDocument(User):
    """User record as persisted by a store.

    ``password`` holds a bcrypt hash. ``pk`` is the constant partition key
    that keeps every user in one logical partition, so the store's unique-key
    policy on ``/email`` spans all users.
    """

    password: str = Field(..., description="bcrypt hash of the user's password")
    pk: str = Field(default=USERS_PARTITION, description="Partition key")

    def to_public(self) -> User:
        """Drop the stored-only fields."""
        return User.model_validate(self.model_dump(by_alias=True, exclude={"password", "pk"}))
