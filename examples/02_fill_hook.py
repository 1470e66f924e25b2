"""
Example 02: Fill Hook and Generic Records

This example demonstrates intercepting nested entity construction and
hydrating untyped SimpleNamespace records.
"""

from types import SimpleNamespace

from entity_builder import Hydrator


class Country:
    code: str = ""
    name: str = ""


class City:
    name: str = ""
    country: Country | None = None


COUNTRIES = {"NO": "Norway", "SE": "Sweden"}


def lookup_country(entity, property_name, target_type, value):
    """Resolve countries from a reference table instead of the payload."""
    code = value.get("code")
    if code in COUNTRIES:
        country = target_type()
        country.code = code
        country.name = COUNTRIES[code]
        setattr(entity, property_name, country)


def main():
    print("=== Fill Hook ===\n")

    hydrator = Hydrator(allowed_types=[City, Country]).register_fill_hook(lookup_country)
    cities = hydrator.build(
        City,
        [
            {"name": "Oslo", "country": {"code": "NO"}},
            {"name": "Lyon", "country": {"code": "FR", "name": "France"}},
        ],
    )
    for city in cities:
        print(f"   - {city.name}: {city.country.name} ({city.country.code})")
    print()

    print("=== Generic Records ===\n")
    generic = Hydrator(allow_generic_record_only=True)
    record = generic.build(SimpleNamespace, {"id": 7, "kind": "sensor"})
    print(f"   Data: {record}")
    print(f"   City allowed: {generic.is_allowed(City)}")


if __name__ == "__main__":
    main()
