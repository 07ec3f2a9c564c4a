"""Public models for formstate.

Type aliases for form values and errors, plus a serializable snapshot of a
form's state:

    from formstate.models import FormSnapshot

    snapshot = form.snapshot()
    snapshot.model_dump(mode="json")
"""

from pydantic import BaseModel

FormValue = str | int | float | bool
FormData = dict[str, FormValue]
FormErrors = dict[str, str | list[str]]


class FormSnapshot(BaseModel):
    """Point-in-time view of a form.

    Fields:
        data: Working values
        defaults: Baseline values
        errors: Per-field error messages
        has_errors: Whether any field has an error
        is_dirty: Whether data differs from defaults
        processing: Whether a request is in flight
    """

    data: FormData = {}
    defaults: FormData = {}
    errors: FormErrors = {}
    has_errors: bool = False
    is_dirty: bool = False
    processing: bool = False

    model_config = {"frozen": True}


__all__ = ["FormValue", "FormData", "FormErrors", "FormSnapshot"]
