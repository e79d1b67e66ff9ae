"""Errors returned by the Vipps eCom API."""

from pydantic import BaseModel, ConfigDict, Field

from ..errors import APIErrors, ErrorTranslator


class EcomAPIError(BaseModel):
    """A single error returned by the eCom API."""

    group: str = Field(default="", validation_alias="errorGroup")
    message: str = Field(default="", validation_alias="errorMessage")
    code: str = Field(default="", validation_alias="errorCode")

    model_config = ConfigDict(validate_by_name=True)


class EcomError(APIErrors[EcomAPIError]):
    """One or more errors reported by the eCom API."""

    entry_model = EcomAPIError

    def render_entry(self, entry: EcomAPIError) -> str:
        return f"[{entry.group}] {entry.message} (code {entry.code})"


translator = ErrorTranslator(EcomError)
wrap_error = translator.translate
