"""
Report hand-off targets.

A finished session is handed to the report side exactly once through
``complete_session``. The call is a one-way notification: navigators log
their own failures and never raise back into the session controller.
"""

import asyncio
from typing import Callable, Iterable, List, Optional

import requests
from sqlalchemy.exc import SQLAlchemyError

from mock_interview.core.logging_config import get_logger
from mock_interview.schemas.session import SessionResult
from mock_interview.services.report_persistence import save_report

logger = get_logger(__name__)


class ReportNavigator:
    def complete_session(self, result: SessionResult) -> None:
        raise NotImplementedError


class DatabaseReportNavigator(ReportNavigator):
    """Stores the result as an ``InterviewReport`` row for the report endpoints."""

    def __init__(self, session_factory: Callable):
        self.session_factory = session_factory

    def complete_session(self, result: SessionResult) -> None:
        db = self.session_factory()
        try:
            save_report(db, result)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to store report for session %s", result.session_id)
        finally:
            db.close()


class WebhookReportNavigator(ReportNavigator):
    """POSTs the result to an external report page without waiting for it."""

    def __init__(self, url: str, timeout: float = 2.0):
        self.url = url
        self.timeout = timeout

    def complete_session(self, result: SessionResult) -> None:
        payload = result.model_dump(mode="json")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._post(payload)
            return
        loop.run_in_executor(None, self._post, payload)

    def _post(self, payload: dict) -> None:
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(
                "Report webhook failed for session %s: %s", payload.get("session_id"), e
            )


class CompositeReportNavigator(ReportNavigator):
    def __init__(self, navigators: Iterable[ReportNavigator]):
        self.navigators: List[ReportNavigator] = list(navigators)

    def complete_session(self, result: SessionResult) -> None:
        for navigator in self.navigators:
            navigator.complete_session(result)


def create_report_navigator(
    session_factory: Callable,
    webhook_url: Optional[str] = None,
    webhook_timeout: float = 2.0,
) -> ReportNavigator:
    navigators: List[ReportNavigator] = [DatabaseReportNavigator(session_factory)]
    if webhook_url:
        navigators.append(WebhookReportNavigator(webhook_url, timeout=webhook_timeout))
    return CompositeReportNavigator(navigators)
