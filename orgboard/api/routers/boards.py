from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from orgboard.models.board import Board, Company
from orgboard.services.board_service import BoardService
from orgboard.services.crawl.base import ExtractionError, NoResultsError, TransportError

router = APIRouter(tags=["boards"])


def get_board_service() -> BoardService:
    return BoardService()


@router.get("/companies/search", response_model=List[Company])
def api_search_companies(
    q: str = Query(..., min_length=1, description="Company name to search"),
    service: BoardService = Depends(get_board_service),
):
    try:
        return service.search(q)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except TransportError as exc:
        raise HTTPException(status_code=502, detail=str(exc))


@router.get("/boards", response_model=Board)
def api_get_board(
    q: str = Query(..., min_length=1, description="Company name to search"),
    service: BoardService = Depends(get_board_service),
):
    try:
        return service.lookup(q)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except NoResultsError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ExtractionError as exc:
        raise HTTPException(status_code=422, detail=f"Board page could not be parsed: {exc}")
    except TransportError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
