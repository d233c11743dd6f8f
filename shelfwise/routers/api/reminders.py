"""On-demand pantry reminder endpoints."""

import typing as t

from fastapi import APIRouter, Depends, HTTPException, Request, status

from shelfwise.core.auth import get_current_uid
from shelfwise.schemas.reminder import SweepResult
from shelfwise.services import (
    Notifier,
    ReminderPermissionError,
    check_reminder_permission,
    run_reminder_sweep,
)

ROUTER = APIRouter(prefix="/reminders", tags=["Reminders"])


def get_notifier(request: Request) -> Notifier | None:
    """Dependency providing the push notifier set up at startup.

    Args:
        request (Request): The incoming request.

    Returns:
        Notifier | None: The notifier, or None if push is not configured.
    """
    return getattr(request.app.state, "notifier", None)


@ROUTER.post("/run", response_model=SweepResult)
async def run_reminders_for_caller(
    uid: t.Annotated[str, Depends(get_current_uid)],
    notifier: t.Annotated[Notifier | None, Depends(get_notifier)],
) -> SweepResult:
    """Run the reminder sweep for the calling user only.

    Args:
        uid (str): The authenticated caller.
        notifier (Notifier | None): The push notifier.

    Returns:
        SweepResult: The sweep counters.
    """
    try:
        check_reminder_permission(uid)
    except ReminderPermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail=str(e)
        ) from e

    if notifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push notifications not configured.",
        )

    return await run_reminder_sweep(notifier, only_uid=uid)
