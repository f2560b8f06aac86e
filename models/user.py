from pydantic import BaseModel


class UserDTO(BaseModel):
    """Authenticated user as supplied by the authentication context."""
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    token: str | None = None  # Bearer token for the shop API
