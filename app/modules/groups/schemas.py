from pydantic import BaseModel


class GroupSummary(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True
