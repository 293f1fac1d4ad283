"""
Skin Wellness radial visualization and aggregation engine.

Used as a library without `skin_wellness.core.logging.configure_logging()`,
the core's structlog events are filtered at INFO so per-call debug events
stay quiet. A host that configures structlog itself keeps its own setup.
"""

import logging

import structlog

__version__ = "1.0.0"


def configure_default_logging() -> None:
    if structlog.is_configured():
        return
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        cache_logger_on_first_use=False,
    )


configure_default_logging()
