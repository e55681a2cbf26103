"""
models/animal.py
----------------
Domain model for individual animals.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Animal:
    """
    Represents a row of the `animal` table.

    Attributes:
        id: Primary key, assigned by the caller.
        species_id: Id of the animal's species (not enforced as a foreign key).
        name: The animal's name.
        date_born: Date and time of birth.
    """
    id: int
    species_id: int
    name: str
    date_born: datetime

    def values(self) -> tuple:
        """Column values in table order, with the timestamp as SQL text."""
        return (self.id, self.species_id, self.name, self.date_born.strftime("%Y-%m-%d %H:%M:%S"))

    def __str__(self) -> str:
        return f"#{self.id} {self.name} (species {self.species_id}, born {self.date_born:%Y-%m-%d})"
