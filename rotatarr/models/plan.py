"""Models for subscription windows and the rolling plan."""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rotatarr.core.months import add_months, parse_month_key


class ComputedWindow(BaseModel):
    """A recommended subscribe/cancel pair for one show."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["computed"] = "computed"
    primary_subscribe: str
    primary_cancel: str
    secondary_subscribe: Optional[str] = None
    is_complete: bool
    first_date: str = ""
    last_date: str = ""
    note: str = ""

    @model_validator(mode="after")
    def check_months(self) -> "ComputedWindow":
        subscribe = parse_month_key(self.primary_subscribe)
        cancel = parse_month_key(self.primary_cancel)
        if cancel != add_months(subscribe, 1):
            raise ValueError("primary_cancel must be one month after primary_subscribe")
        if self.is_complete and self.secondary_subscribe is not None:
            raise ValueError("secondary_subscribe is only set while a show is airing")
        return self


class UnknownWindow(BaseModel):
    """Not enough date information to recommend a month."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown"] = "unknown"
    is_complete: bool = False
    note: str = "Dates not announced yet"


SubscriptionWindow = Annotated[
    Union[ComputedWindow, UnknownWindow], Field(discriminator="kind")
]


class Show(BaseModel):
    """A tracked title as seen by the scheduler."""

    model_config = ConfigDict(frozen=True)

    title: str
    service: str
    window: SubscriptionWindow
    favorite: bool = False
    watch_live: bool = False
    # 0 = first show the user added; None sorts after every tracked show
    added_order: Optional[int] = Field(default=None, ge=0)
    tmdb_id: Optional[int] = None
    media_type: Optional[Literal["movie", "tv"]] = None
    poster_url: Optional[str] = None


class MonthPlan(BaseModel):
    """The service assigned to one calendar month."""

    service: Optional[str] = None
    shows: List[Show] = []
    # Other services with a watch-live show wanting this month
    also_watch_live: List[str] = []


Calendar = Dict[str, MonthPlan]


class MonthLabel(BaseModel):
    key: str
    label: str


class RollingPlan(BaseModel):
    """A 12-month plan plus the labels used to display it."""

    months: List[MonthLabel]
    plan: Calendar
    # Services that wanted a month but found every month already taken
    dropped_services: List[str] = []
