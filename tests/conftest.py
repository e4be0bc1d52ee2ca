"""
Pytest 配置和共享 fixtures
"""

from pathlib import Path

import pytest

from stack_advisor.compatibility import Conflict, Severity
from stack_advisor.health import (
    BuildFacts,
    CheckResult,
    DependencyFacts,
    PerformanceFacts,
    ProjectHandle,
    SecurityFacts,
    SecurityFinding,
    TestFacts,
)


def make_conflict(severity, resolution="fix it", conflict_type="feature", affected=("a", "b")):
    return Conflict(
        type=conflict_type,
        severity=severity,
        description=f"{severity} conflict",
        affected=affected,
        resolution=resolution,
    )


def make_check(name, status, score, details=""):
    return CheckResult(name=name, status=status, score=score, details=details)


@pytest.fixture
def healthy_project():
    """所有事实都良好的项目"""
    return ProjectHandle(
        path=Path("/tmp/healthy-app"),
        dependencies=DependencyFacts(total=40),
        build=BuildFacts(success=True, duration_seconds=30.0),
        tests=TestFacts(passed=120, failed=0, coverage=92.0),
        security=SecurityFacts(findings=[]),
        performance=PerformanceFacts(bundle_size_kb=900, build_time_seconds=30, load_time_ms=800),
    )


@pytest.fixture
def sample_facts():
    """示例事实文档"""
    return {
        "path": "./my-app",
        "dependencies": {"total": 42, "outdated": ["react"], "vulnerable": []},
        "build": {"success": True, "duration_seconds": 38.5},
        "tests": {"passed": 120, "failed": 0, "coverage": 84},
        "security": {
            "findings": [
                {
                    "id": "SNYK-JS-LODASH-567746",
                    "severity": "medium",
                    "recommendation": "Upgrade lodash to version 4.17.12 or higher",
                }
            ]
        },
        "performance": {"bundle_size_kb": 1250, "build_time_seconds": 45.2, "load_time_ms": 1200},
    }


@pytest.fixture
def critical_conflict():
    return make_conflict(Severity.CRITICAL, resolution="remove module")
