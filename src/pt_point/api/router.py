"""pt_point REST API — 4 endpoints, thin adapter over PointApplicationService."""

from fastapi import APIRouter, Path, Request

from src.pt_common.response import ApiResponse, success_response
from src.pt_point.application.schemas import (
    PointAmountRequest,
    PointBalanceResponse,
    PointHistoryResponse,
)
from src.pt_point.application.service import PointApplicationService

router = APIRouter(prefix="/point", tags=["point"])

_service = PointApplicationService()


def _respond(data: dict, request: Request) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{user_id}")
async def get_point(
    request: Request,
    user_id: int = Path(...),
) -> ApiResponse:
    balance = await _service.get_balance(user_id)
    return _respond(PointBalanceResponse.from_domain(balance).model_dump(), request)


@router.get("/{user_id}/histories")
async def get_histories(
    request: Request,
    user_id: int = Path(...),
) -> ApiResponse:
    records = await _service.get_history(user_id)
    return _respond(PointHistoryResponse.from_domain(records).model_dump(), request)


@router.patch("/{user_id}/charge")
async def charge(
    body: PointAmountRequest,
    request: Request,
    user_id: int = Path(...),
) -> ApiResponse:
    balance = await _service.charge(user_id, body.amount)
    return _respond(PointBalanceResponse.from_domain(balance).model_dump(), request)


@router.patch("/{user_id}/use")
async def use(
    body: PointAmountRequest,
    request: Request,
    user_id: int = Path(...),
) -> ApiResponse:
    balance = await _service.use(user_id, body.amount)
    return _respond(PointBalanceResponse.from_domain(balance).model_dump(), request)
