from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from dishlens.orchestrator.contracts import DishResult

class DishResultOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    region: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    fun_facts: List[str] = Field(default_factory=list, alias="funFacts")

    @classmethod
    def from_result(cls, result: DishResult) -> "DishResultOut":
        return cls(
            name=result.name,
            region=result.region,
            ingredients=result.ingredients,
            instructions=result.instructions,
            fun_facts=result.fun_facts,
        )

class ErrorOut(BaseModel):
    error: str

class HealthResponse(BaseModel):
    api: bool
    vision_adapter: str
    vision_configured: bool   # credential present right now

class StatusResponse(BaseModel):
    requests_served: int
    last_error: Optional[str] = None
    logs: list[str]
