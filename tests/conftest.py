# tests/conftest.py
import logging
from datetime import date

import pytest

from core.domain.allocation import Allocation, AllocationPlan, AllocationRequest
from core.domain.enums import Complexity
from core.domain.leave import LeaveRecord
from core.domain.resource import Resource
from core.services.validation import ValidationEngine


def make_allocation(
    resource: str,
    pct: float | None = 0.5,
    *,
    alloc_id: str | None = None,
    start: date | None = None,
    end: date | None = None,
    complexity: Complexity = Complexity.MEDIUM,
    task_name: str = "Build",
    status: str | None = None,
    project_name: str = "Apollo",
) -> Allocation:
    return Allocation(
        id=alloc_id or f"a-{resource}-{task_name}-{pct}",
        resource=resource,
        project_name=project_name,
        task_name=task_name,
        complexity=complexity,
        allocation_percentage=pct,
        status=status,
        plan=AllocationPlan(task_start=start, task_end=end),
    )


@pytest.fixture
def alice():
    return Resource(
        id="r-alice",
        name="Alice",
        tier_level=3,
        skill_areas=("Python", "React", "Senior Architect"),
    )


@pytest.fixture
def bob():
    return Resource(id="r-bob", name="Bob", tier_level=1, skill_areas=("HTML",))


@pytest.fixture
def resources(alice, bob):
    return [alice, bob]


@pytest.fixture
def march():
    return date(2024, 3, 1), date(2024, 3, 31)


@pytest.fixture
def engine():
    return ValidationEngine()


@pytest.fixture
def request_for():
    def _build(resource: str = "Alice", **extra) -> AllocationRequest:
        extra.setdefault("project_name", "Apollo")
        extra.setdefault("task_name", "New feature")
        return AllocationRequest(resource=resource, **extra)

    return _build


@pytest.fixture
def vacation():
    return LeaveRecord(
        id="l-1",
        member_name="Alice",
        leave_type="vacation",
        start_date=date(2024, 3, 10),
        end_date=date(2024, 3, 12),
    )


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("ALLOCATION_VALIDATOR_HOME", str(tmp_path / "home"))
