"""Turn instruction models."""

from __future__ import annotations

from pydantic import Field

from pynavroute.models._base import IndexedItem, NavBaseModel, NavEnum


class TurnDirection(NavEnum):
    """Car/bicycle turn instruction at a path vertex."""

    UNKNOWN = -1
    NO_TURN = 0
    GO_STRAIGHT = 1
    TURN_RIGHT = 2
    TURN_SHARP_RIGHT = 3
    TURN_SLIGHT_RIGHT = 4
    TURN_LEFT = 5
    TURN_SHARP_LEFT = 6
    TURN_SLIGHT_LEFT = 7
    U_TURN_LEFT = 8
    U_TURN_RIGHT = 9
    TAKE_THE_EXIT = 10
    ENTER_ROUND_ABOUT = 11
    LEAVE_ROUND_ABOUT = 12
    STAY_ON_ROUND_ABOUT = 13
    START_AT_END_OF_STREET = 14
    REACHED_YOUR_DESTINATION = 15


class PedestrianDirection(NavEnum):
    """Pedestrian-specific instruction at a path vertex."""

    UNKNOWN = -1
    NONE = 0
    UPSTAIRS = 1
    DOWNSTAIRS = 2
    LIFT_GATE = 3
    GATE = 4
    REACHED_YOUR_DESTINATION = 5


class TurnItem(IndexedItem):
    """A turn instruction located at path vertex ``index``."""

    turn: TurnDirection = TurnDirection.NO_TURN
    pedestrian_turn: PedestrianDirection = PedestrianDirection.NONE
    exit_num: int = Field(default=0, ge=0)
    source_name: str = ""
    target_name: str = ""
    keep_anyway: bool = False

    @property
    def is_destination(self) -> bool:
        return self.turn == TurnDirection.REACHED_YOUR_DESTINATION


class TurnItemDist(NavBaseModel):
    """A turn paired with the distance from the cursor to it."""

    turn_item: TurnItem
    dist_meters: float
