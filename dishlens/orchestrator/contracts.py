from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

UNKNOWN_DISH = "Unknown Dish"
UNIDENTIFIED_DISH = "Unable to identify dish"
DEFAULT_REGION = "Origin not specified"

@dataclass
class DishResult:
    name: str
    region: Optional[str] = None
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)   # ordered steps
    fun_facts: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "region": self.region,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "funFacts": list(self.fun_facts),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DishResult":
        # absent arrays become [] so callers never null-check
        return cls(
            name=data.get("name") or UNKNOWN_DISH,
            region=data.get("region"),
            ingredients=list(data.get("ingredients") or []),
            instructions=list(data.get("instructions") or []),
            fun_facts=list(data.get("funFacts") or []),
        )


def unidentified_result() -> DishResult:
    return DishResult(
        name=UNIDENTIFIED_DISH,
        region=DEFAULT_REGION,
        ingredients=[],
        instructions=["No instructions available"],
        fun_facts=["No information available"],
    )


class CameraState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    ACTIVE = "active"
    CAPTURING = "capturing"
    FAILED = "failed"
    CLOSED = "closed"

# Browser getUserMedia constraints, mirrored by the camera adapters
FACING_MODE = "environment"
IDEAL_WIDTH = 1920
IDEAL_HEIGHT = 1080
JPEG_QUALITY = 95   # 0.95 on the canvas.toBlob scale
