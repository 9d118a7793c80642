"""
Finance Tracker Endpoints.

Income and expense entries, the categories they are filed under and
per-category budgets, all private to the caller. Monthly figures use the
current UTC calendar month.
"""

from typing import Dict, List

from fastapi import APIRouter, HTTPException, Response, status

from studentos.core.database.entities import FinanceCategory, Transaction
from studentos.core.database.repositories import FinanceRepository
from studentos.core.models.domain import TransactionType
from studentos.core.models.io.finance import (
    BudgetProgress,
    BudgetRead,
    BudgetUpsert,
    CategoryCreate,
    CategoryRead,
    FinanceSummary,
    TransactionCreate,
    TransactionRead,
)
from studentos.server.services.cards import read_with
from studentos.server.services.deps import CurrentUser, SessionDep
from studentos.server.services.finance import month_window, period_window

router = APIRouter()

RECENT_TRANSACTIONS = 5


def _with_category(transaction: Transaction, categories: Dict[str, FinanceCategory]) -> TransactionRead:
    category = categories.get(transaction.category_id or "")
    return read_with(
        TransactionRead, transaction, category=CategoryRead.model_validate(category) if category else None
    )


async def _transactions_read(repository: FinanceRepository, transactions: List[Transaction]) -> List[TransactionRead]:
    categories = await repository.categories_by_id([t.category_id for t in transactions])
    return [_with_category(transaction, categories) for transaction in transactions]


async def _get_category_or_404(repository: FinanceRepository, category_id: str, user_id: str) -> FinanceCategory:
    category = await repository.get_category(category_id, user_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get(
    "/summary",
    response_model=FinanceSummary,
    summary="Monthly Summary",
    description="This month's income, expenses and balance, plus the five most recent transactions.",
)
async def get_summary(user: CurrentUser, session: SessionDep) -> FinanceSummary:
    repository = FinanceRepository(session)
    start, end = month_window()
    income = await repository.total(user.id, TransactionType.INCOME, start, end)
    expense = await repository.total(user.id, TransactionType.EXPENSE, start, end)
    recent = await repository.list_transactions(user.id, limit=RECENT_TRANSACTIONS)
    return FinanceSummary(
        income=income,
        expense=expense,
        balance=income - expense,
        recent_transactions=await _transactions_read(repository, recent),
    )


# =====================================================================
# Transactions
# =====================================================================


@router.get("/transactions", response_model=List[TransactionRead], summary="List Transactions")
async def list_transactions(user: CurrentUser, session: SessionDep) -> List[TransactionRead]:
    repository = FinanceRepository(session)
    return await _transactions_read(repository, await repository.list_transactions(user.id))


@router.post(
    "/transactions",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Transaction",
    responses={404: {"description": "Category not found"}},
)
async def create_transaction(body: TransactionCreate, user: CurrentUser, session: SessionDep) -> TransactionRead:
    repository = FinanceRepository(session)
    categories: Dict[str, FinanceCategory] = {}
    if body.category_id:
        category = await _get_category_or_404(repository, body.category_id, user.id)
        categories[category.id] = category
    data = body.model_dump(exclude_none=True)
    transaction = await repository.create(Transaction(user_id=user.id, **data))
    return _with_category(transaction, categories)


@router.delete(
    "/transactions/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(transaction_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = FinanceRepository(session)
    transaction = await repository.get_transaction(transaction_id, user.id)
    if transaction is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await repository.delete_transaction(transaction)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Categories
# =====================================================================


@router.get("/categories", response_model=List[CategoryRead], summary="List Categories")
async def list_categories(user: CurrentUser, session: SessionDep) -> List[CategoryRead]:
    categories = await FinanceRepository(session).list_categories(user.id)
    return [CategoryRead.model_validate(category) for category in categories]


@router.post(
    "/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED, summary="Create Category"
)
async def create_category(body: CategoryCreate, user: CurrentUser, session: SessionDep) -> CategoryRead:
    category = await FinanceRepository(session).create(FinanceCategory(user_id=user.id, **body.model_dump()))
    return CategoryRead.model_validate(category)


# =====================================================================
# Budgets
# =====================================================================


@router.get(
    "/budgets",
    response_model=List[BudgetProgress],
    summary="List Budgets",
    description="Each budget with what was spent in its category during the current month or year.",
)
async def list_budgets(user: CurrentUser, session: SessionDep) -> List[BudgetProgress]:
    repository = FinanceRepository(session)
    budgets = await repository.list_budgets(user.id)
    categories = await repository.categories_by_id([b.category_id for b in budgets])
    progress = []
    for budget in budgets:
        start, end = period_window(budget.period)
        spent = await repository.total(user.id, TransactionType.EXPENSE, start, end, category_id=budget.category_id)
        category = categories.get(budget.category_id)
        progress.append(
            read_with(
                BudgetProgress,
                budget,
                category=CategoryRead.model_validate(category) if category else None,
                spent=spent,
                remaining=budget.amount - spent,
            )
        )
    return progress


@router.post(
    "/budgets",
    response_model=BudgetRead,
    summary="Set Budget",
    description="Create the budget for a category and period, or change its amount if it exists.",
    responses={404: {"description": "Category not found"}},
)
async def upsert_budget(body: BudgetUpsert, user: CurrentUser, session: SessionDep) -> BudgetRead:
    repository = FinanceRepository(session)
    category = await _get_category_or_404(repository, body.category_id, user.id)
    budget = await repository.upsert_budget(user.id, category.id, body.period, body.amount)
    return read_with(BudgetRead, budget, category=CategoryRead.model_validate(category))
