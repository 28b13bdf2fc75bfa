"""
Example 02: Fluent Configuration

This example demonstrates renaming, ignoring, converting and conditionally
mapping members through MapperConfiguration, plus before/after hooks.
"""

from dataclasses import dataclass

from map_plan import ConverterRegistry, MapperConfiguration, MappingSession, SchemaRegistry


@dataclass
class Reading:
    """Sensor reading"""
    sensor: str
    celsius: float
    has_value: bool
    raw_payload: bytes


@dataclass
class ReadingDto:
    """Reading as exposed to clients"""
    sensor_name: str
    fahrenheit: float
    raw_payload: bytes


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def main():
    registry = SchemaRegistry()
    registry.register_class(Reading, type_id="Reading")
    registry.register_class(ReadingDto, type_id="ReadingDto")

    converters = ConverterRegistry()
    converters.register_callable(celsius_to_fahrenheit)

    config = MapperConfiguration()
    (
        config.create_map("Reading", "ReadingDto")
        .map_from("sensor_name", "sensor")
        .for_member(
            "fahrenheit",
            map_from="celsius",
            convert_with="celsius_to_fahrenheit",
            map_when="has_value",
        )
        .ignore("raw_payload")
        .before_map("validate_reading")
        .after_map("stamp_received_at")
    )

    print("=== Fluent Configuration ===\n")

    session = MappingSession(registry, config, converters)
    plan = session.build_plan("Reading", "ReadingDto")

    for mapping in plan.mappings:
        print(f"   {mapping.source.name} -> {mapping.name}: {mapping.kind}")
    print(f"   Hooks: {[hook.hook_ref for hook in plan.hooks]}")
    print()

    print("Omitted:")
    for diagnostic in session.diagnostics:
        print(f"   {diagnostic.describe()}")


if __name__ == "__main__":
    main()
