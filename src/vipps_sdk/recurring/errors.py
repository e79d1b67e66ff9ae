"""Errors returned by the Vipps Recurring Payments API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import APIErrors, ErrorTranslator


class RecurringAPIError(BaseModel):
    """A single error returned by the Recurring Payments API."""

    field: str = ""
    code: str = ""
    message: str = ""
    context_id: Optional[str] = Field(default=None, validation_alias="contextId")

    model_config = ConfigDict(validate_by_name=True)


class RecurringError(APIErrors[RecurringAPIError]):
    """One or more errors reported by the Recurring Payments API."""

    entry_model = RecurringAPIError

    def render_entry(self, entry: RecurringAPIError) -> str:
        return f"field {entry.field}: {entry.message} (code {entry.code})"


translator = ErrorTranslator(RecurringError)
wrap_error = translator.translate
