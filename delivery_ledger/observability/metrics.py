"""
Prometheus metrics collection for delivery-ledger

Counts submissions, data-quality warnings and report runs so that an
operator can see how the ledger is being fed without reading sheets.
"""
from prometheus_client import (
    Counter,
    Gauge,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# INGEST METRICS
# =======================

submissions_total = Counter(
    name="ledger_submissions_total",
    documentation="Form submissions handled, by outcome",
    labelnames=["status"],  # status: written, rejected, skipped, error
    registry=REGISTRY,
)

data_quality_warnings_total = Counter(
    name="ledger_data_quality_warnings_total",
    documentation="Non-fatal data-quality warnings raised while mapping submissions",
    labelnames=["field_name"],
    registry=REGISTRY,
)

# =======================
# REPORT METRICS
# =======================

report_runs_total = Counter(
    name="ledger_report_runs_total",
    documentation="Daily report generations, by outcome",
    labelnames=["status"],  # status: success, input_error, configuration_error, error
    registry=REGISTRY,
)

report_matched_deliveries = Gauge(
    name="ledger_report_matched_deliveries",
    documentation="Deliveries matched by the most recent report run",
    registry=REGISTRY,
)

partition_scan_failures_total = Counter(
    name="ledger_partition_scan_failures_total",
    documentation="Client partitions that could not be scanned during a report run",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics data in Prometheus exposition format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Content type of the exposition format"""
    return CONTENT_TYPE_LATEST


def record_submission(status: str) -> None:
    submissions_total.labels(status=status).inc()


def record_data_quality_warning(field_name: str) -> None:
    data_quality_warnings_total.labels(field_name=field_name).inc()


def record_report_run(status: str, matched: int | None = None) -> None:
    """
    Record the outcome of a report run.

    Args:
        status: Outcome label
        matched: Number of matched deliveries (successful runs only)
    """
    report_runs_total.labels(status=status).inc()
    if matched is not None:
        report_matched_deliveries.set(matched)


def record_partition_scan_failure() -> None:
    partition_scan_failures_total.inc()
