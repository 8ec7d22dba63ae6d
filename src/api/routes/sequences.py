"""
Invoice numbering endpoints (read-only).
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_document_sequencer
from src.application.dto.responses import ErrorResponse, SequencePreviewResponse
from src.core.entities import Region
from src.core.exceptions import SequenceNotFoundError
from src.core.interfaces import IDocumentSequencer

router = APIRouter(prefix="/api/sequences", tags=["sequences"])


@router.get(
    "/{region}/preview",
    response_model=SequencePreviewResponse,
    responses={404: {"model": ErrorResponse}},
)
async def preview_next_number(
    region: Region,
    sequencer: IDocumentSequencer = Depends(get_document_sequencer),
) -> SequencePreviewResponse:
    """Show the number the next invoice in this region would get. Nothing is issued."""
    sequence = await sequencer.get_sequence(region.value)
    if sequence is None:
        raise SequenceNotFoundError(region.value)
    return SequencePreviewResponse(
        region=sequence.region.value,
        prefix=sequence.prefix,
        current_number=sequence.current_number,
        next_number=await sequencer.peek_next_number(region.value),
    )
