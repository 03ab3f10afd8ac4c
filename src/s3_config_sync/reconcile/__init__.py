"""Configuration reconciliation.

Compares the configuration published in S3 with a local desired-state
file and, unless dry-running, publishes the local version.

Modules:

- ``engine``    -- ``ReconcileEngine``: runs the stage sequence.
- ``diff``      -- ``diff_configs``: key-level added/removed/updated diff.
- ``models``    -- ``DiffEntry``, ``UpdatedEntry``, ``DiffReport``.
- ``reporter``  -- Human-readable and JSON report formatting.

Usage example
-------------
::

    from s3_config_sync.config import load_inputs
    from s3_config_sync.reconcile import ReconcileEngine, format_diff_report
    from s3_config_sync.store import S3Store

    inputs = load_inputs(bucket="configs", source="app.toml",
                         destination="prod/app.json", dry_run=True)
    store = S3Store.from_credentials(inputs.access_key, inputs.secret_key,
                                     inputs.region)
    report = await ReconcileEngine(inputs, store).run()
    print(format_diff_report(report, dry_run=inputs.dry_run))
"""

from .diff import diff_configs, values_differ
from .engine import Codecs, ReconcileEngine, ReconcileStage, validate_inputs
from .models import DiffEntry, DiffReport, UpdatedEntry
from .reporter import format_diff_report, format_value, report_to_json

__all__ = [
    "Codecs",
    "DiffEntry",
    "DiffReport",
    "ReconcileEngine",
    "ReconcileStage",
    "UpdatedEntry",
    "diff_configs",
    "format_diff_report",
    "format_value",
    "report_to_json",
    "validate_inputs",
    "values_differ",
]
