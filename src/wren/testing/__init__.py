"""Test utilities for code that validates with wren.

Assertions over ``ValidationResult`` that fail with the full error map
in the message::

    from wren.testing import assert_field_error, assert_valid
"""

from wren.testing.assertions import (
    assert_field_error,
    assert_invalid,
    assert_no_field_error,
    assert_valid,
)

__all__ = [
    "assert_field_error",
    "assert_invalid",
    "assert_no_field_error",
    "assert_valid",
]
