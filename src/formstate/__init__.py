"""Field-level conversion and validation for forms bound to observable models."""

from formstate import codecs
from formstate.accessor import FieldAccessor
from formstate.config import ConverterOptions, FormSettings
from formstate.exceptions import (
    AccessError,
    ConfigurationError,
    ConversionError,
    FieldLookupError,
    FormError,
)
from formstate.fields import BindingMode, FieldDefinition
from formstate.form import Form
from formstate.groups import Group, GroupAccessor
from formstate.model import (
    CustomType,
    DecimalValue,
    ModelBinding,
    ObservableBinding,
    ObservableModel,
    decimal_type,
    register_type,
    type_registry,
)
from formstate.state import FormState
from formstate.validation_props import (
    ValidationPropsConfig,
    reset_validation_props,
    setup_validation_props,
)

__all__ = [
    "AccessError",
    "BindingMode",
    "ConfigurationError",
    "ConversionError",
    "ConverterOptions",
    "CustomType",
    "DecimalValue",
    "FieldAccessor",
    "FieldDefinition",
    "FieldLookupError",
    "Form",
    "FormError",
    "FormSettings",
    "FormState",
    "Group",
    "GroupAccessor",
    "ModelBinding",
    "ObservableBinding",
    "ObservableModel",
    "ValidationPropsConfig",
    "codecs",
    "decimal_type",
    "register_type",
    "reset_validation_props",
    "setup_validation_props",
    "type_registry",
]
