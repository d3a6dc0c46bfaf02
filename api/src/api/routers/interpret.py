"""Tarot spread interpretation."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from readings.interpretation import interpret_tarot
from shefa.schemas.readings import TarotInterpretation, TarotRequest
from shefa.services.llm_client import LLMClient

from api.dependencies import get_llm_client

router = APIRouter()


@router.post("/interpret", response_model=TarotInterpretation)
async def interpret(body: TarotRequest, client: LLMClient = Depends(get_llm_client)):
    return await interpret_tarot(client, body.question, body.cards)
