"""Shared pytest fixtures for cloudstate-config tests."""

from __future__ import annotations

import sys

import pytest
import structlog

from cloudstate_config.defaults import build_defaults
from cloudstate_config.schemas import ServiceConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    Without this, structlog may use different processors depending on
    test execution order, and capsys cannot see the output.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def defaults() -> ServiceConfig:
    """Return a freshly built default configuration."""
    return build_defaults()


@pytest.fixture
def partial_document() -> str:
    """Return a typical operator-edited config.yaml.

    Only a handful of settings are uncommented; everything else relies on
    the defaults.
    """
    return """\
# Settings for the autoscaler
autoscaler:
  # enabled: true
  minReplicas: 2
  # maxReplicas: 10

proxy:
  imagePullPolicy: Always
  resources:
    cpuLimit: "1"
    # memoryLimit: 512Mi

userFunction:
  resources:
    memoryRequest: 1Gi
    memoryLimit: 1Gi
"""
