"""Form data parsing — URL-encoded and multipart.

Implements ``MultiValueMapping`` so a parsed submission can be handed
straight to a validator: repeated keys keep every value in submission
order, bracketed keys (``items[0].name``) are expanded by the input
normalizer.

``bind_form()`` is the request-level seam: read ``request.form()`` and
run a validator over it in one call.

``python-multipart`` is an optional dependency (``pip install wren[forms]``).
URL-encoded forms are parsed with stdlib ``urllib.parse``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wren.validation import SchemaValidator
    from wren.validation.result import ValidationResult


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    This is the Python value of the ``file`` schema kind. Immutable
    metadata with the content held in memory as bytes (suitable for
    typical web uploads).
    """

    filename: str
    content_type: str
    size: int
    _content: bytes

    @classmethod
    def empty(cls) -> UploadFile:
        """A zero-byte, nameless file — the default for ``file`` fields."""
        return cls(filename="", content_type="application/octet-stream", size=0, _content=b"")

    async def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    async def save(self, path: Path) -> None:
        """Write the file content to disk.

        Args:
            path: Destination file path. Parent directories must exist.
        """
        path.write_bytes(self._content)

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
    Holds both string field values and uploaded files.

    ``__getitem__`` returns the first value for a key (string fields only).
    ``get_list`` returns all values for a key — strings first, then files.
    ``files`` provides access to the first uploaded file by field name.

    Usage::

        form = await request.form()
        username = form["username"]
        avatar = form.files.get("avatar")  # UploadFile or None
        result = validate(form)
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, list[UploadFile]] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """First uploaded file by field name."""
        return {name: uploads[0] for name, uploads in self._files.items() if uploads}

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data or key in self._files

    def __iter__(self) -> Iterator[str]:
        yield from self._data
        for name in self._files:
            if name not in self._data:
                yield name

    def __len__(self) -> int:
        return len(self._data.keys() | self._files.keys())

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self.get_list(k)!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str | UploadFile]:
        """Return all values for *key* (checkboxes, multi-selects, multi-file inputs)."""
        return [*self._data.get(key, []), *self._files.get(key, [])]


async def bind_form(
    request: Any,
    validator: SchemaValidator,
    context: Mapping[str, Any] | None = None,
    /,
    **options: Any,
) -> ValidationResult:
    """Validate the form body of a request.

    Reads ``request.form()`` (anything with an async ``.form()`` method
    returning a multi-valued mapping) and runs *validator* over it.

    Usage::

        validate_signup = for_schema({"email": "string", "age?": "number"})

        async def signup(request):
            result = await bind_form(request, validate_signup)
            if not result:
                return Template("signup.html", form=form_helper(result))

    Args:
        request: The request to read the form from.
        validator: A validator built with ``for_schema()``.
        context: Runtime context handed to the validator.
        **options: Validation options (``array_limit``, ``error_message``).

    Returns:
        The ``ValidationResult`` for the submitted form.
    """
    form = await request.form()
    return validator(form, context, **options)


async def parse_form_data(
    body: bytes,
    content_type: str,
) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
    - ``multipart/form-data`` (requires ``python-multipart``)

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.

    Returns:
        Parsed FormData instance.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If content type is not a supported form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return await _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data using stdlib."""
    from urllib.parse import parse_qs

    parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    return FormData(parsed)


async def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data using python-multipart.

    Raises ``ConfigurationError`` if ``python-multipart`` is not installed.
    """
    from wren.errors import ConfigurationError

    try:
        from python_multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        # Releases before 0.0.13 only ship the "multipart" import name
        try:
            from multipart.multipart import MultipartParser, parse_options_header
        except ImportError:
            msg = (
                "Multipart form parsing requires the 'python-multipart' package. "
                "Install it with: pip install wren[forms]"
            )
            raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, list[UploadFile]] = {}

    # Current part state
    current_headers: dict[str, str] = {}
    current_data = bytearray()
    current_field_name: str | None = None
    current_filename: str | None = None

    def on_part_begin() -> None:
        nonlocal current_headers, current_data, current_field_name, current_filename
        current_headers = {}
        current_data = bytearray()
        current_field_name = None
        current_filename = None

    def on_part_data(data_chunk: bytes, start: int, end: int) -> None:
        current_data.extend(data_chunk[start:end])

    def on_part_end() -> None:
        if current_field_name is None:
            return

        if current_filename is not None:
            ct = current_headers.get("content-type", "application/octet-stream")
            content = bytes(current_data)
            files.setdefault(current_field_name, []).append(
                UploadFile(
                    filename=current_filename,
                    content_type=ct,
                    size=len(content),
                    _content=content,
                )
            )
        else:
            value = current_data.decode("utf-8", errors="replace")
            data.setdefault(current_field_name, []).append(value)

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        current_headers["_pending_field"] = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal current_field_name, current_filename
        field = current_headers.pop("_pending_field", "")
        value = hdata[start:end].decode("latin-1")
        current_headers[field] = value

        if field == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            name = params.get(b"name")
            if name is not None:
                current_field_name = name.decode("utf-8")
            fname = params.get(b"filename")
            if fname is not None:
                current_filename = fname.decode("utf-8")

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data, files)
