"""Pydantic model for one extraction result handed to the combiner."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FragmentResult(BaseModel):
    """Raw CSV text returned by the extraction API for one source image.

    ``source_order`` is the image's position in filename order.  Failed
    extractions are kept in the input so the caller can report them, but the
    combiner ignores them.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    content: str = Field(default="", validation_alias=AliasChoices("content", "csvContent", "csv_content"))
    source_order: int = Field(default=0, validation_alias=AliasChoices("source_order", "sourceOrder"))
