"""Polling implementation of :class:`~admiral_cli.core.protocols.TaskWaiter`.

Requests submitted to the service run asynchronously; their progress is
exposed under ``/request-status/<id>``.  The tracker polls until a
terminal stage is reached and forwards every snapshot to an optional
progress callback (the CLI renders it as a spinner).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from admiral_cli.core.models import TaskStatus
from admiral_cli.exceptions import ApiError, TaskFailedError, TaskTimeoutError
from admiral_cli.infra.http_client import AdmiralClient
from admiral_cli.utils.links import make_link

logger = logging.getLogger(__name__)

REQUEST_STATUS_FACTORY = "/request-status"


class RequestStatusTracker:
    """Block until a service request reaches a terminal stage.

    Parameters
    ----------
    client:
        Open :class:`AdmiralClient`.
    timeout:
        Seconds to wait before giving up.
    poll_interval:
        Seconds between two status requests.
    progress_callback:
        Optional callable invoked with each :class:`TaskStatus`.
    """

    def __init__(
        self,
        client: AdmiralClient,
        *,
        timeout: float,
        poll_interval: float,
        progress_callback: Callable[[TaskStatus], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._progress_callback = progress_callback
        self._sleep = sleep
        self._clock = clock

    def status(self, task_id: str) -> TaskStatus:
        body = self._client.get_json(make_link(REQUEST_STATUS_FACTORY, task_id))
        return self._parse_status(task_id, body)

    def wait(self, task_id: str) -> None:
        deadline = self._clock() + self._timeout
        while True:
            current = self.status(task_id)
            logger.debug("Task %s stage=%s progress=%s", task_id, current.stage, current.progress)
            if self._progress_callback is not None:
                self._progress_callback(current)

            if current.is_terminal:
                if current.succeeded:
                    return
                raise TaskFailedError(
                    current.failure_message or f"Task {task_id} ended with stage {current.stage}.",
                )

            if self._clock() >= deadline:
                raise TaskTimeoutError(
                    f"Task {task_id} did not finish within {self._timeout:g} seconds.",
                    hint="Use --async to return immediately and check the host list later.",
                )
            self._sleep(self._poll_interval)

    @staticmethod
    def _parse_status(task_id: str, body: Any) -> TaskStatus:
        if not isinstance(body, dict):
            return TaskStatus(task_id=task_id, stage="UNKNOWN")
        task_info = body.get("taskInfo") or {}
        if not isinstance(task_info, dict):
            raise ApiError(
                f"Unexpected status response for task {task_id}.",
                detail=body,
            )
        failure = task_info.get("failure") or {}
        progress = body.get("progress")
        return TaskStatus(
            task_id=task_id,
            stage=str(task_info.get("stage") or "UNKNOWN"),
            failure_message=failure.get("message") if isinstance(failure, dict) else None,
            progress=int(progress) if isinstance(progress, (int, float)) else None,
        )
