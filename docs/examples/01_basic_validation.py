"""
Example 1: Basic Validation

Learn the fundamentals of shape-guardian with a small server configuration.
"""

from shape_guardian import (
    SchemaValidator,
    ValidationReporter,
    array,
    enumeration,
    number,
    object_,
    prettify_error,
    string,
    to_json_schema,
)


def main():
    """Demonstrate the basic parse / report workflow."""
    print("=" * 80)
    print("Example 1: Basic Validation")
    print("=" * 80)
    print()

    # Step 1: Define a schema with the fluent builders
    print("Step 1: Creating validation schema...")
    schema = (
        object_()
        .field("host", string().hostname())
        .field("port", number().int().min(1).max(65535))
        .field("workers", number().int().min(1).with_default(4))
        .field("mode", enumeration(["dev", "prod"]))
        .field("admins", array(string().email()).non_empty())
        .strict()
    )
    print(f"✓ Schema created with {len(schema.keyof())} fields")
    print()

    # Step 2: Parse a valid document
    print("Step 2: Parsing a valid document...")
    config = schema.parse('{"host": "api.local", "port": 8080, "mode": "dev", "admins": ["ops@example.com"]}')
    print(f"✓ Parsed: {config}")
    print()

    # Step 3: Parse an invalid document without raising
    print("Step 3: Parsing an invalid document...")
    result = schema.safe_parse({"host": "-bad-", "port": 0, "mode": "qa", "admins": [], "debug": True})
    print(f"Validation Result: {'✓ VALID' if result.success else '✗ INVALID'}")
    if result.error is not None:
        print(f"Total Issues: {len(result.error)}")
        print(prettify_error(result.error))
    print()

    # Step 4: Generate reports
    print("Step 4: Generating validation reports...")
    validation = SchemaValidator(schema, lazy=True).validate({"host": "api.local", "port": "80"})
    reporter = ValidationReporter(validation)
    reporter.to_console(verbose=False)
    reporter.to_json("validation_basic.json")
    reporter.to_html("validation_basic.html")
    print("\n✓ Reports exported: validation_basic.json, validation_basic.html")

    # Step 5: JSON Schema projection
    print("\nStep 5: JSON Schema projection...")
    print(to_json_schema(schema))

    print()
    print("=" * 80)
    print("Example complete!")
    print("=" * 80)


if __name__ == "__main__":
    main()
