"""Wren — schema-driven validation and coercion for form and JSON input.

Describe the shape you expect, hand over whatever arrived, get back
normalized data plus path-keyed errors ready for re-rendering a form.

Basic usage::

    from wren import for_schema, form_helper

    validate = for_schema({
        "name": "string",
        "age": "number",
        "nickname?": "string",
        "tags": ["string"],
    })

    result = validate({"name": "Jo", "age": "20x"})
    result.success                   # False
    result.errors["age"].errors      # ["Expected 'number', received '20x'"]

    f = form_helper(result)
    f.age.value                      # "20x"

Form and query input (``pip install wren[forms]`` for multipart)::

    from wren.http.forms import parse_form_data
    form = await parse_form_data(body, content_type)
    result = validate(form)          # items[0].name=... expands to nested data
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FieldErrors",
    "FormData",
    "FormHelper",
    "Issues",
    "QueryParams",
    "SchemaError",
    "SchemaValidator",
    "UploadFile",
    "ValidationResult",
    "ValidatorOptions",
    "WrenError",
    "define_schema",
    "for_schema",
    "form_helper",
    "using_context",
    "validate",
]

_VALIDATION_NAMES = frozenset(
    {
        "FieldErrors",
        "FormHelper",
        "Issues",
        "SchemaValidator",
        "ValidationResult",
        "for_schema",
        "form_helper",
        "using_context",
        "validate",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in _VALIDATION_NAMES:
        import wren.validation

        return getattr(wren.validation, name)

    if name == "define_schema":
        from wren.schema import define_schema

        return define_schema

    if name == "ValidatorOptions":
        from wren.config import ValidatorOptions

        return ValidatorOptions

    if name in ("FormData", "UploadFile"):
        import wren.http.forms

        return getattr(wren.http.forms, name)

    if name == "QueryParams":
        from wren.http.query import QueryParams

        return QueryParams

    if name in ("ConfigurationError", "SchemaError", "WrenError"):
        import wren.errors

        return getattr(wren.errors, name)

    msg = f"module 'wren' has no attribute {name!r}"
    raise AttributeError(msg)
