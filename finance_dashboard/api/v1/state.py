"""Session snapshot export/import in the browser page-storage layout"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from finance_dashboard.api.dependencies import get_dashboard, get_request_id
from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.exceptions import InvalidTransactionDataError
from finance_dashboard.infrastructure.storage.snapshot import dump_snapshot, load_snapshot

router = APIRouter()


@router.get("/state")
def export_state(dashboard: Dashboard = Depends(get_dashboard)) -> Dict[str, Any]:
    """Snapshot the client writes back to page storage after each mutation"""
    return dump_snapshot(dashboard)


@router.put("/state")
def import_state(
    request: Request,
    snapshot: Optional[Dict[str, Any]] = Body(None),
) -> Dict[str, Any]:
    """
    Replace the session with the client's stored snapshot.

    Missing keys load as an empty ledger and no emergency fund.
    """
    request_id = get_request_id(request)

    try:
        restored = load_snapshot(snapshot)
    except InvalidTransactionDataError as e:
        logging.warning(f"Rejected snapshot: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    request.app.state.dashboard = restored
    logging.info(
        "Session restored",
        extra={"request_id": request_id, "step": "state_import", "transaction_count": len(restored.ledger)},
    )

    return dump_snapshot(restored)
