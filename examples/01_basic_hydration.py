"""
Example 01: Basic Hydration

This example demonstrates building plain classes, dataclasses and Pydantic
models from decoded JSON, including nested entities and collections.
"""

import json
from dataclasses import dataclass

from pydantic import BaseModel

from entity_builder import Hydrator


class Address:
    """Address as a plain annotated class"""
    city: str = ""
    zip: int = 0


class Person:
    """Person with a nested address"""
    name: str = ""
    age: int = 0
    address: Address | None = None


@dataclass
class Tag:
    """Tag model using dataclass"""
    label: str
    weight: float = 1.0


class Venue(BaseModel):
    """Venue model using Pydantic"""
    name: str = ""
    capacity: int = 0


def main():
    hydrator = Hydrator(allowed_types=[Person, Address, Tag, Venue])

    print("=== Basic Hydration ===\n")

    # One record, with coercion and an unknown key
    print("1. Single Record:")
    person = hydrator.build(Person, json.loads('{"name": "Ann", "age": "30", "extra": "x"}'))
    print(f"   Type: {type(person).__name__}")
    print(f"   Data: name={person.name!r} age={person.age!r} extra={person.extra!r}\n")

    # Nested entity
    print("2. Nested Entity:")
    person = hydrator.build(Person, {"name": "Bo", "address": {"city": "NY", "zip": "10001"}})
    print(f"   Access: person.address.city = {person.address.city}")
    print(f"   Access: person.address.zip = {person.address.zip}\n")

    # Collection of records
    print("3. Collection:")
    tags = hydrator.build(Tag, [{"label": "red"}, {}, {"label": "blue", "weight": "0.5"}])
    for tag in tags:
        print(f"   - {tag}")
    print()

    # Pydantic model, unknown keys kept aside
    print("4. Pydantic Model:")
    venue = hydrator.build(Venue, {"name": "Arena", "capacity": "500", "founded": 1999})
    print(f"   Data: {venue!r}")
    print(f"   Extra: {hydrator.extra_attributes(venue)}\n")

    # Rejected target type
    print("5. Allow-List:")
    print(f"   build('stdClass', ...) -> {hydrator.build('stdClass', {'a': 1})}")


if __name__ == "__main__":
    main()
