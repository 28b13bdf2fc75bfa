"""
Example 01: Basic Plan

This example demonstrates resolving a mapping plan between two record
schemas declared by type name, including a nested record pair.
"""

from map_plan import SchemaRegistry, TypeSchema, build_plan


def main():
    registry = SchemaRegistry(
        [
            TypeSchema.of("ContactInfo", {"Email": "string"}),
            TypeSchema.of("ContactInfoDto", {"Email": "string"}),
            TypeSchema.of("Person", {"Name": "string", "Age": "Int32", "Contact": "ContactInfo"}),
            TypeSchema.of("PersonDto", {"Name": "string", "Age": "Int64", "Contact": "ContactInfoDto"}),
        ]
    )

    print("=== Basic Plan ===\n")

    tree = build_plan("Person", "PersonDto", registry)

    for plan in tree:
        print(f"Plan {plan.ref}:")
        for mapping in plan.mappings:
            print(f"   {mapping.source.name} -> {mapping.name}: {mapping.kind}")
        print()


if __name__ == "__main__":
    main()
