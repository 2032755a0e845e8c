from enum import Enum
from dataclasses import dataclass


class CleaningState(str, Enum):
    CLEAN = "Clean"
    NEEDS_CLEANING = "Needs Cleaning"

    def toggled(self) -> "CleaningState":
        if self is CleaningState.CLEAN:
            return CleaningState.NEEDS_CLEANING
        return CleaningState.CLEAN


class Occupancy(str, Enum):
    VACANT = "Vacant"
    CHECK_IN = "Check-in"
    CHECK_OUT = "Check-out"
    IN_HOUSE = "In-house"


@dataclass
class CleaningStatus:
    room_number: str
    status: CleaningState = CleaningState.CLEAN


@dataclass(frozen=True)
class CleaningToggle:
    room_number: str
    current: CleaningState
    proposed: CleaningState
