import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, NamedTuple, Optional


class CourierType(enum.Enum):
    FOOT = 'FOOT'
    BIKE = 'BIKE'
    AUTO = 'AUTO'


class CourierFactors(NamedTuple):
    cost: int  # multiplier applied to the sum of order costs
    rate: int  # multiplier applied to completed orders per hour


@dataclass
class CourierInput:
    courier_type: CourierType
    regions: List[int]
    working_hours: List[str]


@dataclass
class CourierRecord:
    courier_id: int
    courier_type: CourierType
    regions: List[int] = field(default_factory=list)
    working_hours: List[str] = field(default_factory=list)


@dataclass
class CourierMetaInfo:
    courier_id: int
    courier_type: CourierType
    regions: List[int]
    working_hours: List[str]
    rating: int
    earnings: int

    @classmethod
    def from_record(cls, courier: CourierRecord, rating: int, earnings: int) -> 'CourierMetaInfo':
        return cls(courier_id=courier.courier_id, courier_type=courier.courier_type, regions=list(courier.regions),
                   working_hours=list(courier.working_hours), rating=rating, earnings=earnings)


@dataclass
class OrderInput:
    weight: float
    region: int
    delivery_hours: List[str]
    cost: int


@dataclass
class OrderRecord:
    order_id: int
    weight: float
    region: int
    cost: int
    delivery_hours: List[str] = field(default_factory=list)
    courier_id: Optional[int] = None
    completed_time: Optional[datetime] = None


@dataclass
class CompleteOrder:
    courier_id: int
    order_id: int
    complete_time: datetime
