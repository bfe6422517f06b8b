"""Mini README: FastAPI-powered JSON interface for the budget planner.

Structure:
    * create_application - application factory wiring routes to a
      ``PeriodManager``, an advice provider and a remote sync client.
    * ExpenseRequest / SyncRequest - request bodies.

Every mutating route re-runs the full allocation and returns the fresh
period report, so clients never patch allowances themselves. Invalid input
maps to HTTP 400, unknown records or policies to 404, an unreadable receipt
to 422 and receipt scanning without an AI provider to 501.
"""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..advice import (
    AdviceProvider,
    AdviceSnapshot,
    build_advice_provider,
    record_receipt,
    request_advice,
)
from ..budget import DEFAULT_CATEGORY, REGISTRY, InvalidInputError, Ledger, PeriodConfig, PeriodManager
from ..configuration import get_settings
from ..logging_utils import get_logger
from ..storage import JsonFileLedgerStore, RemoteSyncClient

LOGGER = get_logger(__name__)


class ExpenseRequest(BaseModel):
    """Body for recording an expense."""

    day_number: int
    amount: float
    label: str = ""
    category: str = Field(DEFAULT_CATEGORY, description="One of the fixed spending categories.")


class SyncRequest(BaseModel):
    """Body naming the remote key a ledger is synced under."""

    sync_key: str = Field(..., description="Key under which the ledger is stored remotely.")


def create_application(
    manager: Optional[PeriodManager] = None,
    advisor: Optional[AdviceProvider] = None,
    sync_client: Optional[RemoteSyncClient] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and collaborators."""

    app = FastAPI(title="Daily Budget Planner", version="0.1.0")
    settings = get_settings()
    manager = manager or PeriodManager(JsonFileLedgerStore())
    advisor = advisor or build_advice_provider(settings)
    sync_client = sync_client or RemoteSyncClient()

    def _report(ledger: Ledger, policy: Optional[str], target: Optional[float]) -> JSONResponse:
        try:
            report = manager.evaluate(
                ledger,
                target if target is not None else settings.base_daily_target,
                policy or settings.default_policy,
            )
        except InvalidInputError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        LOGGER.debug(
            "Report %s policy=%s spent=%.2f balance=%.2f",
            report.config.key,
            report.policy,
            report.summary.total_spent,
            report.summary.total_balance,
        )
        return JSONResponse(report.as_dict())

    def _guarded(action: Callable[[], Ledger]) -> Ledger:
        try:
            return action()
        except InvalidInputError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error

    def _target(value: Optional[float]) -> float:
        return value if value is not None else settings.base_daily_target

    @app.get("/policies")
    async def policies() -> JSONResponse:
        """List the registered allocation policies."""

        return JSONResponse({"default": settings.default_policy, "policies": REGISTRY.describe()})

    @app.get("/periods/{year}/{month}")
    async def period_report(
        year: int,
        month: int,
        policy: Optional[str] = Query(None),
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Open the period and return its allocation and summary."""

        ledger = _guarded(lambda: manager.open_period(year, month, _target(base_daily_target)))
        return _report(ledger, policy, base_daily_target)

    @app.post("/periods/{year}/{month}/expenses")
    async def create_expense(
        year: int,
        month: int,
        expense: ExpenseRequest,
        policy: Optional[str] = Query(None),
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Record an expense and return the recomputed period."""

        ledger = _guarded(
            lambda: manager.add_expense(
                year,
                month,
                expense.day_number,
                expense.amount,
                expense.label,
                category=expense.category,
            )
        )
        return _report(ledger, policy, base_daily_target)

    @app.delete("/periods/{year}/{month}/days/{day_number}/expenses/{expense_id}")
    async def delete_expense(
        year: int,
        month: int,
        day_number: int,
        expense_id: str,
        policy: Optional[str] = Query(None),
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Remove an expense and return the recomputed period."""

        ledger = _guarded(lambda: manager.remove_expense(year, month, day_number, expense_id))
        return _report(ledger, policy, base_daily_target)

    @app.post("/periods/{year}/{month}/reset")
    async def reset_period(
        year: int,
        month: int,
        policy: Optional[str] = Query(None),
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Clear every expense of the period."""

        ledger = _guarded(lambda: manager.reset_period(year, month))
        LOGGER.info("Period %s reset by request", ledger.key)
        return _report(ledger, policy, base_daily_target)

    @app.get("/periods/{year}/{month}/advice")
    async def advice(
        year: int,
        month: int,
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Ask the configured advisor about the period's settled days."""

        target = _target(base_daily_target)
        try:
            ledger = manager.open_period(year, month, target)
            snapshot = AdviceSnapshot.from_ledger(ledger, PeriodConfig(year, month, target))
            result = request_advice(advisor, snapshot)
        except InvalidInputError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(result.as_dict())

    @app.post("/periods/{year}/{month}/days/{day_number}/receipt")
    async def scan_receipt(
        year: int,
        month: int,
        day_number: int,
        image: UploadFile = File(...),
        policy: Optional[str] = Query(None),
        base_daily_target: Optional[float] = Query(None),
    ) -> JSONResponse:
        """Scan a receipt image and record its total as an expense."""

        data = await image.read()
        LOGGER.info("Received receipt upload %s (%s bytes)", image.filename, len(data))
        try:
            scan = advisor.scan_receipt(data, image.content_type or "image/jpeg")
        except NotImplementedError as error:
            raise HTTPException(status_code=501, detail=str(error)) from error
        except ValueError as error:
            raise HTTPException(status_code=422, detail=f"Could not read receipt: {error}") from error
        ledger = _guarded(
            lambda: manager.apply(year, month, lambda current: record_receipt(current, day_number, scan))
        )
        return _report(ledger, policy, base_daily_target)

    @app.post("/periods/{year}/{month}/sync/push")
    async def sync_push(year: int, month: int, request: SyncRequest) -> JSONResponse:
        """Push the period's ledger to the remote key-value store."""

        ledger = _guarded(lambda: manager.open_period(year, month, settings.base_daily_target))
        pushed = sync_client.push(request.sync_key, ledger)
        return JSONResponse({"period": ledger.key, "pushed": pushed})

    @app.post("/periods/{year}/{month}/sync/pull")
    async def sync_pull(year: int, month: int, request: SyncRequest) -> JSONResponse:
        """Replace the local ledger with the remote copy when it matches the period."""

        remote = sync_client.pull(request.sync_key)
        if remote is None or (remote.year, remote.month) != (year, month):
            LOGGER.info("No usable remote ledger for %04d-%02d", year, month)
            ledger = _guarded(lambda: manager.open_period(year, month, settings.base_daily_target))
            return JSONResponse({"period": ledger.key, "pulled": False})
        manager.replace_ledger(remote)
        return JSONResponse({"period": remote.key, "pulled": True})

    return app
