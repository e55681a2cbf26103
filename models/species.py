"""
models/species.py
-----------------
Domain model for the species kept at the zoo.
"""

from dataclasses import dataclass


@dataclass
class Species:
    """
    Represents a row of the `species` table.

    Attributes:
        id: Primary key, assigned by the caller.
        name: Common name of the species.
        num_acres: Space set aside for the species, two decimal places.
    """
    id: int
    name: str
    num_acres: float

    def values(self) -> tuple:
        """Column values in table order."""
        return (self.id, self.name, self.num_acres)

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({self.num_acres:.2f} acres)"
