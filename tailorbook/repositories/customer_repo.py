from typing import Optional, Union
from tailorbook.repositories.base import JsonCollectionRepository
from tailorbook.schemas.customer import Customer, Measurements


class CustomerRepository(JsonCollectionRepository[Customer]):
    record_model = Customer

    def create(
        self,
        name: str,
        phone: str,
        email: Optional[str] = None,
        address: Optional[str] = None,
        measurements: Optional[Union[Measurements, dict]] = None,
    ) -> Customer:
        """Create a new customer"""
        return self._insert({
            "name": name,
            "phone": phone,
            "email": email,
            "address": address,
            "measurements": measurements or Measurements(),
        })
