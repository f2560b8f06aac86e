from enum import Enum


class PetStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"        # Reserved by an open order
    ADOPTED = "adopted"
    SOLD = "sold"
