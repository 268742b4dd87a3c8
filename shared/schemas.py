from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Primary keys are int4 columns on PostgreSQL.
MAX_ROW_ID = 2**31 - 1

RowId = Annotated[int, Field(gt=0, le=MAX_ROW_ID)]
RowIdPath = Annotated[int, Path(gt=0, le=MAX_ROW_ID)]


class CamelModel(BaseModel):
    """Base DTO: camelCase on the wire, snake_case in Python, readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
