# blueprint_api/models/requests.py
from pydantic import BaseModel


class BlueprintRequest(BaseModel):
    prompt: str
