"""Enumerations shared by the planner schemas."""

from enum import Enum


class VenueCategory(str, Enum):
    FOOD = "food"
    DRINK = "drink"
    ACTIVITY = "activity"
    NATURE = "nature"
    CULTURE = "culture"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    FULL_DAY = "full_day"


class BudgetRange(str, Enum):
    """Symbolic budget levels. ``tier`` maps them onto 1-4."""

    LOW = "$"
    MID = "$$"
    HIGH = "$$$"
    LUXURY = "$$$$"

    @property
    def tier(self) -> int:
        return len(self.value)


class OccasionType(str, Enum):
    DATE_NIGHT = "date_night"
    FIRST_DATE = "first_date"
    ANNIVERSARY = "anniversary"
    FRIENDS_NIGHT = "friends_night"
    FAMILY_OUTING = "family_outing"
    SOLO_ADVENTURE = "solo_adventure"
    CASUAL_HANGOUT = "casual_hangout"
    SPECIAL_OCCASION = "special_occasion"
    ACTIVE_DAY = "active_day"
    CHILL_DAY = "chill_day"


class SlotType(str, Enum):
    MEAL = "meal"
    ACTIVITY = "activity"
    EVENT = "event"
    DRINKS = "drinks"
    DESSERT = "dessert"


class ModifyOperation(str, Enum):
    SWAP = "SWAP"
    ADD = "ADD"


class ModifyStatus(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
