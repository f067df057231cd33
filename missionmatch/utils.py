"""Shared utilities for missionmatch."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class SubjectNotFoundError(Exception):
    """Raised when the freelancer or mission being matched does not exist."""

    kind = "subject"

    def __init__(self, subject_id: str):
        self.subject_id = subject_id
        super().__init__(f"{self.kind.capitalize()} not found: {subject_id}")


class FreelancerNotFoundError(SubjectNotFoundError):
    kind = "freelancer"


class MissionNotFoundError(SubjectNotFoundError):
    kind = "mission"


class ApplicationNotFoundError(SubjectNotFoundError):
    kind = "application"


class MissionNotAvailableError(Exception):
    """Raised when applying to a mission that is not published."""

    def __init__(self, mission_id: str, status: str):
        self.mission_id = mission_id
        self.status = status
        super().__init__(f"Mission {mission_id} is not open for applications (status: {status})")


class ApplicationExistsError(Exception):
    """Raised when a freelancer applies to the same mission twice."""

    def __init__(self, freelancer_id: str, mission_id: str):
        self.freelancer_id = freelancer_id
        self.mission_id = mission_id
        super().__init__(
            f"Freelancer {freelancer_id} has already applied to mission {mission_id}"
        )


@contextmanager
def best_effort(operation: str) -> Iterator[None]:
    """Run a side effect whose failure must never reach the caller.

    Any exception raised inside the block is logged as a warning and
    discarded. Nothing is retried.

    Args:
        operation: Short label used in the log message (e.g. "cache read").
    """
    try:
        yield
    except Exception as e:
        logger.warning(f"Best-effort {operation} failed: {e!r}")
