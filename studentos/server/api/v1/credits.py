"""
Credit Endpoints.

Every account starts with a credit balance. Using a paid tool charges its
credit cost; free tools are always available to signed-in users.
"""

from typing import Union

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from studentos.core.database.entities import Tool
from studentos.core.database.repositories import ToolRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.tools import (
    CreditBalance,
    CreditHistory,
    CreditUsageRead,
    CreditUseRequest,
    CreditUseResult,
    InsufficientCredits,
    ToolRead,
    ToolSummary,
)
from studentos.server.core.constant import MAX_PAGE_LIMIT
from studentos.server.services.cards import read_with
from studentos.server.services.deps import CurrentUser, SessionDep

logger = get_logger(__name__)

router = APIRouter()

HISTORY_PAGE_LIMIT = 20


async def _get_tool_or_404(repository: ToolRepository, slug: str) -> Tool:
    tool = await repository.get_by_slug(slug)
    if tool is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tool not found")
    return tool


@router.get("/balance", response_model=CreditBalance, summary="Credit Balance")
async def get_balance(user: CurrentUser, session: SessionDep) -> CreditBalance:
    balance, referral_code = await ToolRepository(session).balance_of(user.id)
    return CreditBalance(balance=balance, referral_code=referral_code)


@router.post(
    "/use",
    response_model=CreditUseResult,
    summary="Use Tool",
    description="Charge the tool's credit cost to the caller. Free tools are not charged or recorded.",
    responses={
        400: {"description": "Tool is currently disabled"},
        402: {"description": "Insufficient credits", "model": InsufficientCredits},
        404: {"description": "Tool not found"},
    },
)
async def use_credits(
    body: CreditUseRequest, user: CurrentUser, session: SessionDep
) -> Union[CreditUseResult, JSONResponse]:
    repository = ToolRepository(session)
    tool = await _get_tool_or_404(repository, body.tool_slug)
    if not tool.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tool is currently disabled")
    if tool.credit_cost == 0:
        return CreditUseResult(tool_name=tool.name, credit_cost=0, message="Free tool - no credits required")

    spent = await repository.spend(user.id, tool)
    if spent is None:
        available, _ = await repository.balance_of(user.id)
        logger.info(f"User {user.id} lacks credits for {tool.slug}: {available}/{tool.credit_cost}")
        shortfall = InsufficientCredits(
            required=tool.credit_cost,
            available=available,
            shortfall=tool.credit_cost - available,
            tool_name=tool.name,
        )
        return JSONResponse(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            content={"error": "INSUFFICIENT_CREDITS", "data": shortfall.model_dump(by_alias=True)},
        )

    balance, usage = spent
    return CreditUseResult(
        tool_name=tool.name,
        credit_cost=tool.credit_cost,
        remaining_balance=balance,
        usage_id=usage.id,
        message=f"Successfully used {tool.credit_cost} credits for {tool.name}",
    )


@router.get(
    "/history",
    response_model=CreditHistory,
    summary="Credit History",
    description="The caller's paid tool uses, newest first.",
)
async def get_history(
    user: CurrentUser,
    session: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(HISTORY_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> CreditHistory:
    rows, total = await ToolRepository(session).usage_history(user.id, page, limit)
    return CreditHistory(
        history=[read_with(CreditUsageRead, usage, tool=ToolSummary.model_validate(tool)) for usage, tool in rows],
        pagination=Pagination.build(page, limit, total),
    )


@router.get(
    "/tool/{slug}",
    response_model=ToolRead,
    summary="Tool Details",
    responses={404: {"description": "Tool not found"}},
)
async def get_tool(slug: str, user: CurrentUser, session: SessionDep) -> ToolRead:
    return ToolRead.model_validate(await _get_tool_or_404(ToolRepository(session), slug))
