# -*- coding: utf-8 -*-
"""Request, field and outcome types for the modal dialogs.

Field descriptors are a closed set of dataclasses, one per control kind, so
that attributes like ``options`` only exist where they mean something.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Literal, Mapping, Optional, Tuple, Union

ModalVariant = Literal["default", "danger"]


class ModalRequestError(ValueError):
    """Raised when a modal request is built with inconsistent parameters."""


class _Unset:
    """Sentinel type for labels the caller did not provide."""

    _instance: ClassVar[Optional["_Unset"]] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

# A cancel label is either a string, None (no cancel button), or UNSET (use
# the default for the dialog kind).
CancelLabel = Union[str, None, _Unset]


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


@dataclass(frozen=True)
class _FieldBase:
    kind: ClassVar[str] = ""

    name: str
    label: str = ""
    required: bool = False
    placeholder: str = ""
    description: str = ""
    initial_value: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ModalRequestError("Field name must not be empty")


@dataclass(frozen=True)
class TextField(_FieldBase):
    kind: ClassVar[str] = "text"


@dataclass(frozen=True)
class TextareaField(_FieldBase):
    kind: ClassVar[str] = "textarea"

    rows: ClassVar[int] = 3


@dataclass(frozen=True)
class DateField(_FieldBase):
    kind: ClassVar[str] = "date"


@dataclass(frozen=True)
class SelectField(_FieldBase):
    kind: ClassVar[str] = "select"

    options: Tuple[SelectOption, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.options:
            raise ModalRequestError(f"Select field '{self.name}' needs at least one option")
        # Accept plain (label, value) pairs for convenience.
        normalized = tuple(opt if isinstance(opt, SelectOption) else SelectOption(*opt) for opt in self.options)
        object.__setattr__(self, "options", normalized)

    @property
    def selected_value(self) -> str:
        """Value preselected when the control renders."""
        values = [opt.value for opt in self.options]
        if self.initial_value in values:
            return self.initial_value
        return values[0]


FieldDescriptor = Union[TextField, TextareaField, SelectField, DateField]

FIELD_TYPES: Dict[str, type] = {
    TextField.kind: TextField,
    TextareaField.kind: TextareaField,
    SelectField.kind: SelectField,
    DateField.kind: DateField,
}


def field_from_dict(data: Mapping[str, Any]) -> FieldDescriptor:
    """Build a field descriptor from a plain mapping with a ``type`` key.

    Accepts both ``initial_value`` and the camelCase ``initialValue`` key.
    """
    field_type = data.get("type", "text")
    field_cls = FIELD_TYPES.get(field_type)
    if field_cls is None:
        raise ModalRequestError(f"Unknown field type: {field_type!r}")

    kwargs: Dict[str, Any] = {
        "name": data.get("name", ""),
        "label": data.get("label", ""),
        "required": bool(data.get("required", False)),
        "placeholder": data.get("placeholder") or "",
        "description": data.get("description") or "",
        "initial_value": data.get("initial_value", data.get("initialValue")) or "",
    }
    if field_cls is SelectField:
        options = []
        for opt in data.get("options") or ():
            if isinstance(opt, Mapping):
                options.append(SelectOption(label=str(opt["label"]), value=str(opt["value"])))
            else:
                options.append(SelectOption(*opt))
        kwargs["options"] = tuple(options)
    return field_cls(**kwargs)


@dataclass(frozen=True)
class ModalRequest:
    """Parameters for one dialog invocation."""

    title: str
    message: Optional[str] = None
    confirm_label: Optional[str] = None
    cancel_label: CancelLabel = UNSET
    variant: ModalVariant = "default"
    dismissible: bool = True
    fields: Optional[Tuple[FieldDescriptor, ...]] = None

    def __post_init__(self) -> None:
        if self.variant not in ("default", "danger"):
            raise ModalRequestError(f"Unknown modal variant: {self.variant!r}")
        if self.fields is None:
            return
        fields = tuple(f if isinstance(f, _FieldBase) else field_from_dict(f) for f in self.fields)
        seen = set()
        for descriptor in fields:
            if descriptor.name in seen:
                raise ModalRequestError(f"Duplicate field name in modal request: {descriptor.name!r}")
            seen.add(descriptor.name)
        object.__setattr__(self, "fields", fields)

    @property
    def is_form(self) -> bool:
        """An explicit field list, even an empty one, picks the form labels."""
        return self.fields is not None

    @property
    def has_fields(self) -> bool:
        """Only a non-empty field list renders a form and yields values."""
        return bool(self.fields)

    @property
    def resolved_confirm_label(self) -> str:
        if self.confirm_label is not None:
            return self.confirm_label
        return "Save" if self.is_form else "OK"

    @property
    def resolved_cancel_label(self) -> Optional[str]:
        """Cancel button text, or None when the dialog has no cancel button."""
        if self.cancel_label is UNSET:
            return "Cancel" if self.is_form else "Close"
        return self.cancel_label


@dataclass(frozen=True)
class ModalOutcome:
    """Result delivered to the caller once a dialog closes."""

    confirmed: bool
    values: Optional[Dict[str, str]] = field(default=None)
