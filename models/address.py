from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

import config


class AddressDTO(BaseModel):
    """Postal address as sent to the order service."""
    model_config = ConfigDict(populate_by_name=True)

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field(default="", alias="zipCode")
    country: str = ""


class ShippingFormDTO(BaseModel):
    """Step 1 of checkout. Held by the orchestrator across Back/Next."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = Field(default_factory=lambda: config.DEFAULT_COUNTRY)

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("first_name", "last_name", "email", "phone", "address", "city")

    def missing_fields(self) -> dict[str, str]:
        """Map of required field name -> error text for every blank required field."""
        return {
            name: f"{name.replace('_', ' ').capitalize()} is required"
            for name in self.REQUIRED_FIELDS
            if not getattr(self, name).strip()
        }

    def to_address(self) -> AddressDTO:
        return AddressDTO(
            street=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


class BillingFormDTO(BaseModel):
    same_as_shipping: bool = True
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = Field(default_factory=lambda: config.DEFAULT_COUNTRY)

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("first_name", "last_name", "address", "city")

    def missing_fields(self) -> dict[str, str]:
        if self.same_as_shipping:
            return {}
        return {
            f"billing_{name}": f"Billing {name.replace('_', ' ')} is required"
            for name in self.REQUIRED_FIELDS
            if not getattr(self, name).strip()
        }

    def to_address(self, shipping: ShippingFormDTO) -> AddressDTO:
        if self.same_as_shipping:
            return shipping.to_address()
        return AddressDTO(
            street=self.address,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )
