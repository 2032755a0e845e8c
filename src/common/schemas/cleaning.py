from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from common.models.cleaning import CleaningState


class CleaningStatusRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    room_number: str = Field(min_length=1)
    status: CleaningState


class CleaningToggleRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    confirm: bool = False
    expected_status: Optional[CleaningState] = None
