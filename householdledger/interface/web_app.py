"""Mini README: FastAPI service exposing the household ledger.

Structure:
    * create_application - application factory wiring the ledger routes.

The routes are thin: each one forwards form fields or query parameters to
``LedgerService`` and returns JSON (or a CSV download). Rejected input maps
to HTTP 400, unknown transaction ids to HTTP 404. Confirmation of
destructive actions is left to whichever client calls the API.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse, Response

from ..configuration import get_settings
from ..finance import DEFAULT_CATEGORIES, LedgerService, create_ledger_service
from ..logging_utils import configure_root_logger, get_logger

LOGGER = get_logger(__name__)


def create_application(service: Optional[LedgerService] = None) -> FastAPI:
    """Create the FastAPI application around ``service`` (file-backed by default)."""

    if service is None:
        settings = get_settings()
        configure_root_logger(settings.log_level)
        service = create_ledger_service(settings)
    ledger = service

    app = FastAPI(title="Household Ledger", version="0.1.0")

    @app.get("/categories")
    async def categories() -> JSONResponse:
        """Return the built-in category choices."""

        return JSONResponse(
            {"categories": list(DEFAULT_CATEGORIES), "default": ledger.default_category}
        )

    @app.get("/transactions")
    async def list_transactions(month: Optional[str] = Query(None)) -> JSONResponse:
        """Return the transactions of the selected month, newest first."""

        try:
            transactions = ledger.list_month(month)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        LOGGER.debug("Returning %s transactions for %s", len(transactions), month or ledger.query_month)
        return JSONResponse(
            {
                "month": month or ledger.query_month,
                "transactions": [transaction.as_dict() for transaction in transactions],
            }
        )

    @app.post("/transactions", status_code=201)
    async def add_transaction(
        amount: str = Form(...),
        transaction_type: str = Form("expense", alias="type"),
        category: Optional[str] = Form(None),
        memo: str = Form(""),
        occurred_on: Optional[str] = Form(None, alias="date"),
    ) -> JSONResponse:
        """Record a transaction submitted from the entry form."""

        try:
            transaction = ledger.add_transaction(
                {
                    "type": transaction_type,
                    "amount": amount,
                    "category": category,
                    "memo": memo,
                    "date": occurred_on,
                }
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.delete("/transactions/{transaction_id}")
    async def remove_transaction(transaction_id: str) -> JSONResponse:
        """Delete every transaction carrying the given id."""

        removed = ledger.remove_transaction(transaction_id)
        if not removed:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse({"transaction_id": transaction_id, "removed": removed})

    @app.post("/reset")
    async def reset() -> JSONResponse:
        """Clear the ledger and its persisted slot."""

        ledger.reset_all()
        return JSONResponse({"transactions": 0})

    @app.get("/export")
    async def export_csv() -> Response:
        """Download the whole ledger as CSV."""

        export = ledger.export_csv()
        return Response(
            content=export.content.encode("utf-8"),
            media_type=export.media_type,
            headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
        )

    @app.post("/import")
    async def import_csv(file: UploadFile = File(...)) -> JSONResponse:
        """Import an uploaded CSV file, prepending its rows to the ledger."""

        data = await file.read()
        LOGGER.info("Received CSV upload %s (%s bytes)", file.filename, len(data))
        try:
            imported = ledger.import_csv(data)
        except ValueError as error:
            # UnicodeDecodeError is a ValueError as well.
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"imported": len(imported), "total": len(ledger.list_transactions())})

    @app.get("/summary")
    async def summary(month: Optional[str] = Query(None)) -> JSONResponse:
        """Return income, expense, balance and category nets for a month."""

        try:
            monthly = ledger.get_summary(month)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(monthly.as_dict())

    @app.put("/query-month")
    async def set_query_month(month: str = Form(...)) -> JSONResponse:
        """Change the month used when requests omit ``month``."""

        try:
            selected = ledger.set_query_month(month)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"month": selected})

    return app
