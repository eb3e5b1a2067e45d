from travel_diary.domains.identity.entities import User
from travel_diary.domains.identity.schemas import UserCredentials, UserResponse, MessageResponse

__all__ = [
    "User",
    "UserCredentials", "UserResponse", "MessageResponse"
]
