"""CleanResponse Pydantic model -- the result bundle returned to callers."""

from pydantic import BaseModel, ConfigDict, Field

from models.summary import ImpactSummary


class CleanResponse(BaseModel):
    """Response body for ``POST /clean``."""

    model_config = ConfigDict(populate_by_name=True)

    cleaned_html: str = Field(alias="cleanedHtml")
    summary: ImpactSummary
