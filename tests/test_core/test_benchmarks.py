"""Performance benchmark tests using pytest-benchmark."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from shape_guardian import (
    ObjectSchema,
    SchemaValidator,
    ValidationReporter,
    array,
    boolean,
    diff_schemas,
    number,
    object_,
    string,
    to_json_schema,
)


def make_records(count: int) -> List[Dict[str, Any]]:
    return [
        {
            "id": i,
            "name": f"user_{i}",
            "age": 25 + (i % 50),
            "score": float(50 + (i % 50)),
            "active": i % 2 == 0,
            "tags": ["a", "b"],
        }
        for i in range(count)
    ]


@pytest.fixture()
def small_records() -> List[Dict[str, Any]]:
    """Small batch for benchmarking (100 records)."""
    return make_records(100)


@pytest.fixture()
def medium_records() -> List[Dict[str, Any]]:
    """Medium batch for benchmarking (10,000 records)."""
    return make_records(10000)


@pytest.fixture()
def benchmark_schema() -> ObjectSchema:
    """Standard schema for benchmarking."""
    return (
        object_()
        .field("id", number().int().min(0))
        .field("name", string().min(1))
        .field("age", number().int().min(0).max(120))
        .field("score", number().min(0.0).max(100.0))
        .field("active", boolean())
        .field("tags", array(string()).max_len(10))
    )


class TestValidationBenchmarks:
    """Benchmark tests for parsing performance."""

    def test_benchmark_single_parse(
        self,
        benchmark: pytest.FixtureRequest,
        benchmark_schema: ObjectSchema,
    ) -> None:
        payload = json.dumps(make_records(1)[0])

        result = benchmark(benchmark_schema.parse, payload)
        assert result["name"] == "user_0"

    def test_benchmark_small_batch_validation(
        self,
        benchmark: pytest.FixtureRequest,
        small_records: List[Dict[str, Any]],
        benchmark_schema: ObjectSchema,
    ) -> None:
        """Benchmark batch validation of 100 records."""
        validator = SchemaValidator(benchmark_schema, lazy=True)

        results = benchmark(lambda: list(validator.validate_many(small_records)))
        assert all(result.is_valid for result in results)

    def test_benchmark_medium_batch_validation(
        self,
        benchmark: pytest.FixtureRequest,
        medium_records: List[Dict[str, Any]],
        benchmark_schema: ObjectSchema,
    ) -> None:
        """Benchmark batch validation of 10,000 records."""
        validator = SchemaValidator(benchmark_schema, lazy=True)

        results = benchmark(lambda: list(validator.validate_many(medium_records, chunk_size=2500)))
        assert len(results) == 4

    def test_benchmark_failing_batch(
        self,
        benchmark: pytest.FixtureRequest,
        small_records: List[Dict[str, Any]],
        benchmark_schema: ObjectSchema,
    ) -> None:
        invalid = [dict(record, age=-1) for record in small_records]
        validator = SchemaValidator(benchmark_schema, lazy=True)

        results = benchmark(lambda: list(validator.validate_many(invalid)))
        assert results[0].metadata["failed"] == 100


class TestSchemaOperationBenchmarks:
    """Benchmark tests for schema operations."""

    def test_benchmark_schema_creation(self, benchmark: pytest.FixtureRequest) -> None:
        def create_schema() -> ObjectSchema:
            return (
                object_()
                .field("col1", number().int().min(0).max(1000))
                .field("col2", string())
                .field("col3", number().min(0.0).max(100.0))
                .field("col4", boolean())
                .field("col5", number().int().optional())
            )

        schema = benchmark(create_schema)
        assert len(schema.keyof()) == 5

    def test_benchmark_json_schema(self, benchmark: pytest.FixtureRequest, benchmark_schema: ObjectSchema) -> None:
        result = benchmark(to_json_schema, benchmark_schema)
        assert result["type"] == "object"

    def test_benchmark_schema_diff(self, benchmark: pytest.FixtureRequest, benchmark_schema: ObjectSchema) -> None:
        changed = benchmark_schema.field("name", string().min(3))

        diff = benchmark(diff_schemas, benchmark_schema, changed)
        assert diff.has_breaking


class TestReportingBenchmarks:
    """Benchmark tests for reporting operations."""

    def test_benchmark_reporter_to_dataframe(
        self,
        benchmark: pytest.FixtureRequest,
        small_records: List[Dict[str, Any]],
        benchmark_schema: ObjectSchema,
    ) -> None:
        invalid = [dict(record, score=150.0) for record in small_records]
        result = next(SchemaValidator(benchmark_schema, lazy=True).validate_many(invalid))
        reporter = ValidationReporter(result)

        df = benchmark(reporter.to_dataframe)
        assert len(df) == 100
