"""
Test data generators for parsing and rendering benchmarks.

Creates object-rooted JSON documents for performance testing:
- Different sizes (small/large)
- Different shapes (flat/nested/array-heavy)
- String-heavy content with escape sequences

Payloads are seeded so every library sees identical input.
"""

import json
import random
import string
from typing import Any

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_SHORT_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]


def generate_test_data(data_type: str) -> str:
    """Generates JSON text for the named payload."""
    return json.dumps(generate_test_document(data_type))


def generate_test_document(data_type: str) -> dict[str, Any]:
    """Generates the named payload as Python data."""
    generators = {
        "small_object": _small_object,
        "large_object": _large_object,
        "mixed_array": _mixed_array,
        "nested_structure": _nested_structure,
        "string_heavy": _string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def _small_object(rng: random.Random) -> dict[str, Any]:
    """A small object (< 1KB) with basic members."""
    return {
        "id": rng.randint(10000, 99999),
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _timestamp(rng: random.Random) -> str:
    return (
        f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z"
    )


def _large_object(rng: random.Random) -> dict[str, Any]:
    """A large object (> 10KB): a profile plus transaction history."""
    return {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(rng, 10),
            "last_name": _random_string(rng, 12),
            "address": {
                "street": f"{rng.randint(1, 9999)} {_random_string(rng, 8)} St",
                "city": _random_string(rng, 12),
                "zip": f"{rng.randint(10000, 99999)}",
            },
            "notifications": {
                "email": rng.choice([True, False]),
                "push": rng.choice([True, False]),
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _timestamp(rng),
                "status": rng.choice(["completed", "pending", "failed"]),
                "refund": None,
            }
            for i in range(80)
        ],
    }


def _mixed_array(rng: random.Random) -> dict[str, Any]:
    """A document holding a large array with mixed value kinds."""
    kinds = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _random_string(rng, 10)},
    ]
    return {"items": [rng.choice(kinds)(i) for i in range(200)]}


def _nested_structure(rng: random.Random) -> dict[str, Any]:
    """A deeply nested document; each level repeats below itself."""

    def create_level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}

        return {
            "level": depth,
            "items": [create_level(depth - 1) for _ in range(2)],
            "nested": create_level(depth - 1),
        }

    return create_level(6)


def _string_heavy(rng: random.Random) -> dict[str, Any]:
    """Strings where escape sequences are common."""

    def escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_SHORT_ESCAPES))
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [escaped_string() for _ in range(100)],
        "paths": {
            f"key_{i}": f"C:\\Users\\{_random_string(rng, 8)}\\file_{i}.txt"
            for i in range(20)
        },
    }


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
