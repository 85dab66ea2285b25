"""Demonstration of shape-guardian reporting features."""

from pathlib import Path

from shape_guardian import (
    SchemaValidator,
    ValidationReporter,
    number,
    object_,
    string,
)


def demo_validation_reporting():
    """Demonstrate validation reporting with various output formats."""
    print("=" * 80)
    print("shape-guardian - Validation Reporting Demo")
    print("=" * 80)
    print()

    # 1. Create sample schema
    schema = (
        object_()
        .field("id", number().int().min(0))
        .field("email", string().email())
        .field("age", number().int().min(0).max(120))
        .field("score", number().min(0.0).max(100.0))
    )

    print("Schema created with 4 fields: id, email, age, score")
    print()

    # 2. Create sample records with errors
    records = [
        {"id": -1, "email": "invalid", "age": -5, "score": -10.0},
        {"id": 2, "email": "no-at-sign", "age": 150, "score": 150.0},
        {"id": 3, "email": "test@example.com", "age": 30, "score": 78.1},
        {"id": 4, "email": "bad@", "age": 200, "score": 88.9},
        {"id": 5000, "email": "x@y.io", "age": 45, "score": 95.0},
    ]

    print("Sample records created with multiple validation errors")
    print()

    # 3. Validate the batch
    validator = SchemaValidator(schema, lazy=True)
    result = next(validator.validate_many(records))

    print(f"Validation complete: {result.is_valid}")
    print(f"Total errors: {len(result.errors)}")
    print(f"Failed records: {result.metadata['failed']}")
    print()

    # 4. Generate console report
    print("-" * 80)
    print("CONSOLE REPORT (verbose mode)")
    print("-" * 80)
    reporter = ValidationReporter(result)
    reporter.to_console(verbose=True)
    print()

    # 5. Generate HTML report
    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)

    html_path = output_dir / "validation_report.html"
    reporter.to_html(html_path, title="User Data Validation Report")
    print(f"HTML report generated: {html_path}")

    # 6. Generate JSON export
    json_path = output_dir / "validation_report.json"
    reporter.to_json(json_path, indent=2)
    print(f"JSON report generated: {json_path}")

    # 7. Convert issues to DataFrame for analysis
    errors_df = reporter.to_dataframe()
    print(f"\nErrors DataFrame shape: {errors_df.shape}")
    print("\nIssue distribution by code:")
    print(errors_df["code"].value_counts())

    print()
    print("=" * 80)
    print("Demo complete! Check the 'output' directory for generated reports.")
    print("=" * 80)


if __name__ == "__main__":
    demo_validation_reporting()
