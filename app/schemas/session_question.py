from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionQuestionLookupParams(BaseModel):
    # pas de coercition : "10" ou true ne sont pas des identifiants
    model_config = ConfigDict(strict=True)

    session_id: int = Field(..., gt=0, description="ID de la session d'entraînement")
    question_id: int = Field(..., gt=0, description="ID de la question dans la session")


class SessionQuestionLookupResponse(BaseModel):
    # forme stable : uniquement l'identifiant résolu
    model_config = ConfigDict(extra="forbid")

    session_question_id: int


class SessionQuestionError(BaseModel):
    error: str
    details: Optional[Dict[str, List[str]]] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)
