"""
Example 03: Nested Records, Collections and Cycles

This example demonstrates plans for collections of records and a
self-referential type graph, and strict mode reporting omissions.
"""

from map_plan import (
    MapperConfiguration,
    MappingSession,
    ResolutionSettings,
    SchemaRegistry,
    StrictModeViolation,
    TypeSchema,
)


def main():
    registry = SchemaRegistry(
        [
            TypeSchema.of("Order", {"Id": "Int32", "Total": "decimal", "Tags": list[str]}),
            TypeSchema.of("OrderDto", {"Id": "Int32", "Total": "decimal", "Tags": set[str]}),
            TypeSchema.of(
                "Employee",
                {"Name": "string", "Manager": "Employee", "Orders": list["Order"]},
            ),
            TypeSchema.of(
                "EmployeeDto",
                {"Name": "string", "Manager": "EmployeeDto", "Orders": list["OrderDto"], "Notes": "string"},
            ),
        ]
    )

    print("=== Nested Records, Collections and Cycles ===\n")

    session = MappingSession(registry)
    root = session.build_plan("Employee", "EmployeeDto")
    for plan in session.closure(root):
        print(f"Plan {plan.ref}:")
        for mapping in plan.mappings:
            print(f"   {mapping.name}: {mapping.kind}")
        print()

    print("Strict mode:")
    strict = MappingSession(registry, settings=ResolutionSettings(strict=True))
    try:
        strict.build_plan("Employee", "EmployeeDto")
    except StrictModeViolation as e:
        print(f"   {e}")

    config = MapperConfiguration()
    config.create_map("Employee", "EmployeeDto").ignore("Notes")
    strict = MappingSession(registry, config, settings=ResolutionSettings(strict=True))
    plan = strict.build_plan("Employee", "EmployeeDto")
    print(f"   With Notes ignored: {plan.destination_names}")


if __name__ == "__main__":
    main()
