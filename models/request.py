"""CleanRequest Pydantic model with strict validation (extra=forbid)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.options import CleaningOptions


class CleanRequest(BaseModel):
    """Incoming request body for ``POST /clean`` and ``POST /clean/download``.

    ``html`` is not length-validated here: a blank document is rejected by
    the engine itself so every caller gets the same error.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    html: str
    options: CleaningOptions = Field(default_factory=CleaningOptions)
    session_id: Optional[str] = Field(None, alias="sessionId")
