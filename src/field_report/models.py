"""Data classes for the field report domain model."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_COVER = "https://images.unsplash.com/photo-1507525428034-b723cf961d3e?q=80&w=1000&auto=format&fit=crop"


class ServiceType(Enum):
    AUXILIARY = "Pioneiro Auxiliar"
    REGULAR = "Pioneiro Regular"

    @property
    def default_goal(self) -> int:
        return 50 if self is ServiceType.REGULAR else 30


class ActivityKind(Enum):
    LDC = "LDC"
    ASSEMBLY_HALL = "AssemblyHall"


@dataclass
class UserProfile:
    name: str = ""
    service_type: ServiceType = ServiceType.AUXILIARY
    monthly_goal: float = 30
    whatsapp_number: str = ""
    cover_photo: Optional[str] = DEFAULT_COVER
    profile_picture: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "serviceType": self.service_type.value,
            "monthlyGoal": self.monthly_goal,
            "whatsappNumber": self.whatsapp_number,
        }
        if self.cover_photo is not None:
            data["coverPhoto"] = self.cover_photo
        if self.profile_picture is not None:
            data["profilePicture"] = self.profile_picture
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            name=data["name"],
            service_type=ServiceType(data["serviceType"]),
            monthly_goal=data["monthlyGoal"],
            whatsapp_number=data.get("whatsappNumber", ""),
            cover_photo=data.get("coverPhoto"),
            profile_picture=data.get("profilePicture"),
        )


@dataclass
class DailyEntry:
    id: str
    date: str
    hours: int
    minutes: int
    bible_studies: int = 0
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "date": self.date,
            "hours": self.hours,
            "minutes": self.minutes,
            "bibleStudies": self.bible_studies,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DailyEntry":
        return cls(
            id=data["id"],
            date=data["date"],
            hours=data["hours"],
            minutes=data["minutes"],
            bible_studies=data.get("bibleStudies", 0),
            notes=data.get("notes"),
        )


@dataclass
class ExtraActivity:
    id: str
    type: ActivityKind
    hours: int
    minutes: int
    date: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "hours": self.hours,
            "minutes": self.minutes,
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExtraActivity":
        return cls(
            id=data["id"],
            type=ActivityKind(data["type"]),
            hours=data["hours"],
            minutes=data["minutes"],
            date=data["date"],
        )
